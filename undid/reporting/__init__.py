"""Reporting utilities for the ``undid`` package.

:mod:`undid.reporting.summary` prints a textual overview of a
specification table and :mod:`undid.reporting.plotting` draws each
cohort's comparison window with matplotlib.  For example::

    from undid.reporting import print_diff_summary, plot_diff_design

"""

from .summary import diff_df_overview, print_diff_summary
from .plotting import PlotTheme, cohort_windows, plot_diff_design

__all__ = [
    "diff_df_overview",
    "print_diff_summary",
    "PlotTheme",
    "cohort_windows",
    "plot_diff_design",
]
