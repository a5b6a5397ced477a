# undid/design/common.py
from __future__ import annotations

import pandas as pd

from ..helpers.dates import format_date
from ..helpers.defaults import CalendarTables, DEFAULT_TABLES
from ..helpers.preparation import Roster


def build_common_rows(
    roster: Roster,
    weights: str = "standard",
    tables: CalendarTables = DEFAULT_TABLES,
) -> pd.DataFrame:
    """
    One row per silo for a single-treatment-date design, in roster order.

    Treated silos get ``treat="1"``, controls ``treat="0"``.  Each silo keeps
    its own observation window; there is no sub-period grid and no RI rows.
    """
    fmt = roster.date_format
    common_g = format_date(roster.cohorts[0], fmt, tables)
    rows = [
        {
            "silo_name": r.silo_name,
            "treat": "0" if r.is_control else "1",
            "common_treatment_time": common_g,
            "start_time": format_date(r.start_time, fmt, tables),
            "end_time": format_date(r.end_time, fmt, tables),
            "weights": weights,
        }
        for r in roster.records
    ]
    return pd.DataFrame(
        rows,
        columns=["silo_name", "treat", "common_treatment_time", "start_time", "end_time", "weights"],
    )


__all__ = ["build_common_rows"]
