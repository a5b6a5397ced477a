# undid/design/staggered.py
from __future__ import annotations

from typing import Dict, List, Tuple

import pandas as pd

from ..helpers.dates import date_sequence, format_date, step_back
from ..helpers.defaults import CalendarTables, DEFAULT_TABLES
from ..helpers.frequency import FreqStep
from ..helpers.preparation import Roster
from ..helpers.utils import join_subfields

# (t, pre) pairs for one cohort
CohortGrid = List[Tuple[pd.Timestamp, pd.Timestamp]]


def cohort_grid(g: pd.Timestamp, end: pd.Timestamp, step: FreqStep) -> CohortGrid:
    """Post periods ``g .. end`` of one cohort, each paired with the cohort's
    single pre period ``step_back(g)``.

    A cohort treated on ``end`` itself gets the one-point grid ``[g]``; a
    cohort after ``end`` gets an empty grid.
    """
    pre = step_back(g, step)
    posts = date_sequence(g, end, step)
    return [(t, pre) for t in posts]


def build_cohort_grids(
    cohorts: List[pd.Timestamp], end: pd.Timestamp, step: FreqStep
) -> Dict[pd.Timestamp, CohortGrid]:
    return {g: cohort_grid(g, end, step) for g in sorted(set(cohorts))}


def _rows_for(
    silo_name: str,
    treat: str,
    g: pd.Timestamp,
    grid: CohortGrid,
    date_format: str,
    tables: CalendarTables,
) -> List[dict]:
    g_str = format_date(g, date_format, tables)
    rows = []
    for t, pre in grid:
        t_str = format_date(t, date_format, tables)
        rows.append(
            {
                "silo_name": silo_name,
                "_g": g,
                "treat": treat,
                "diff_times": join_subfields([t_str, format_date(pre, date_format, tables)]),
                "gt": join_subfields([g_str, t_str]),
            }
        )
    return rows


def build_staggered_rows(
    roster: Roster,
    step: FreqStep,
    tables: CalendarTables = DEFAULT_TABLES,
) -> pd.DataFrame:
    """
    Primary (non-RI) comparison rows of a staggered design.

    Treated silos get one row per post period of their own cohort; control
    silos get the union of every cohort's rows, de-duplicated on
    ``(g, t, pre)``.  The result is stably sorted by cohort date and keeps
    the cohort as a ``Timestamp`` in the private ``_g`` column so the RI
    augmenter can match on it; :func:`finalize_staggered` formats it.
    """
    _, end = roster.shared_window()
    grids = build_cohort_grids(roster.cohorts, end, step)

    control_pairs: List[Tuple[pd.Timestamp, CohortGrid]] = []
    seen = set()
    for g, grid in grids.items():
        kept = []
        for t, pre in grid:
            if (g, t, pre) in seen:
                continue
            seen.add((g, t, pre))
            kept.append((t, pre))
        control_pairs.append((g, kept))

    rows: List[dict] = []
    for rec in roster.records:
        if rec.is_control:
            for g, grid in control_pairs:
                rows.extend(_rows_for(rec.silo_name, "0", g, grid, roster.date_format, tables))
        else:
            g = rec.treatment_time
            rows.extend(_rows_for(rec.silo_name, "1", g, grids[g], roster.date_format, tables))

    df = pd.DataFrame(rows, columns=["silo_name", "_g", "treat", "diff_times", "gt"])
    df["RI"] = 0
    return df.sort_values("_g", kind="mergesort").reset_index(drop=True)


def finalize_staggered(
    df: pd.DataFrame,
    roster: Roster,
    tables: CalendarTables = DEFAULT_TABLES,
) -> pd.DataFrame:
    """Format ``gvar`` and attach the shared window as strings."""
    start, end = roster.shared_window()
    out = df.copy()
    out.insert(1, "gvar", [format_date(g, roster.date_format, tables) for g in out["_g"]])
    out = out.drop(columns="_g")
    out["start_time"] = format_date(start, roster.date_format, tables)
    out["end_time"] = format_date(end, roster.date_format, tables)
    return out[["silo_name", "gvar", "treat", "diff_times", "gt", "RI", "start_time", "end_time"]]


__all__ = ["cohort_grid", "build_cohort_grids", "build_staggered_rows", "finalize_staggered"]
