from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import pandas as pd

from ..helpers.defaults import CalendarTables, DEFAULT_TABLES
from ..helpers.errors import CohortCountError, WeightingError
from ..helpers.frequency import FreqStep
from ..helpers.preparation import Roster
from ..helpers.utils import log_step
from .common import build_common_rows
from .ri import augment_ri, reference_control_silo
from .staggered import build_staggered_rows, finalize_staggered


@dataclass(frozen=True)
class CommonDesign:
    """Single treatment date shared by every treated silo."""

    roster: Roster
    weights: str = "standard"

    kind = "common"

    def build(self, tables: CalendarTables = DEFAULT_TABLES) -> pd.DataFrame:
        return build_common_rows(self.roster, self.weights, tables)


@dataclass(frozen=True)
class StaggeredDesign:
    """Two or more treatment dates; optionally augmented with RI rows."""

    roster: Roster
    step: FreqStep
    randomization_inference: bool = True

    kind = "staggered"

    @property
    def control_silo(self) -> str:
        return reference_control_silo(r.silo_name for r in self.roster.controls)

    def build(self, tables: CalendarTables = DEFAULT_TABLES) -> pd.DataFrame:
        df = build_staggered_rows(self.roster, self.step, tables)
        if self.randomization_inference:
            df = augment_ri(df, self.control_silo)
        return finalize_staggered(df, self.roster, tables)


Design = Union[CommonDesign, StaggeredDesign]


def select_design(
    roster: Roster,
    step: FreqStep,
    *,
    weights: str = "standard",
    randomization_inference: bool = True,
    tables: CalendarTables = DEFAULT_TABLES,
    verbose: bool = False,
) -> Design:
    """
    Choose the design for ``roster`` and run every remaining precondition.

    Exactly one cohort gives a :class:`CommonDesign`; two or more give a
    :class:`StaggeredDesign`.  All checks happen here, before any row is
    built.

    Raises
    ------
    CohortCountError
        Fewer than two distinct treatment values, or no treated silo.
    WeightingError
        Unrecognised weighting scheme for a common design.
    WindowMismatchError
        Staggered silos do not share one observation window.
    NoControlSiloError
        Staggered design with RI requested but no control silo.
    """
    n_values = roster.n_treatment_values
    n_cohorts = len(roster.cohorts)
    if n_values < 2 or n_cohorts == 0:
        raise CohortCountError(
            f"Only {n_values} unique `treatment_time` value found; need a control "
            "value and at least one treatment date, or two or more treatment dates."
        )

    if n_cohorts == 1:
        if weights not in tables.weights:
            raise WeightingError(
                f"Unknown weighting {weights!r}. Options are: {', '.join(tables.weights)}."
            )
        log_step("design", "common adoption", verbose=verbose)
        return CommonDesign(roster=roster, weights=weights)

    roster.shared_window()
    design = StaggeredDesign(roster=roster, step=step, randomization_inference=randomization_inference)
    if randomization_inference:
        control = design.control_silo
        log_step("design", f"staggered adoption, {n_cohorts} cohorts; RI reference silo={control}", verbose=verbose)
    else:
        log_step("design", f"staggered adoption, {n_cohorts} cohorts; RI disabled", verbose=verbose)
    return design


__all__ = ["CommonDesign", "StaggeredDesign", "Design", "select_design"]
