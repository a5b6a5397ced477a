"""
The :mod:`undid` package prepares difference-in-differences analyses for
data that lives in separate silos and cannot be pooled.  Only silo-level
summary statistics ever leave a silo; this package handles the first
stage, at the coordinating site: deciding exactly which period-pair
differences every silo has to compute.

The main entry point is :func:`create_diff_df`.  Given an ``init.csv``
roster (one row per silo with its observation window and treatment date,
or ``control``), it returns the ``empty_diff_df`` table that is sent out
to the silos:

``Common adoption``
    A single treatment date.  One row per silo, each with its own
    ``start_time``/``end_time`` window.

``Staggered adoption``
    Two or more treatment dates.  Each treated silo gets one row per post
    period of its cohort, always differenced against the same
    pre-treatment baseline one step before the cohort's treatment date.
    Control silos cover every cohort's window.  Randomization-inference
    rows (``treat == "-1"``, ``RI == 1``) let the aggregation stage
    recompute the estimator under every alternative cohort timing.

Supporting pieces:

* :mod:`undid.helpers.dates` parses and formats dates in the declared
  format and generates period grids.
* :mod:`undid.helpers.frequency` resolves ``"yearly"``/``"monthly"``/
  ``"weekly"``/``"daily"`` plus a multiplier into a step.
* :mod:`undid.helpers.preparation` reads and validates rosters and can
  create a blank ``init.csv``.
* :mod:`undid.reporting` summarises and plots a finished table.

References
----------
Karim, S., Webb, M. D., Austin, N., and Strumpf, E. describe the
undid approach to difference-in-differences with unpoolable data.
MacKinnon and Webb describe the randomization-inference procedure the
RI rows support.
"""

from .diff_df import DiffDfBuilder, create_diff_df
from .helpers.config import DiffConfig
from .helpers.dates import undid_date_formats
from .helpers.errors import (
    CohortCountError,
    FormatError,
    FrequencyError,
    NoControlSiloError,
    OrderingError,
    RosterError,
    UndidError,
    WeightingError,
    WindowMismatchError,
)
from .helpers.preparation import create_init_csv

__all__ = [
    "create_diff_df",
    "create_init_csv",
    "undid_date_formats",
    "DiffDfBuilder",
    "DiffConfig",
    "UndidError",
    "FormatError",
    "OrderingError",
    "FrequencyError",
    "CohortCountError",
    "NoControlSiloError",
    "RosterError",
    "WindowMismatchError",
    "WeightingError",
]
