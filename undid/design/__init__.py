"""Design builders for the difference specification.

This subpackage turns a validated :class:`undid.helpers.preparation.Roster`
into the rows of the specification table:

* :mod:`undid.design.common` - one row per silo for common adoption.
* :mod:`undid.design.staggered` - per-cohort post periods against a single
  pre-treatment baseline for staggered adoption.
* :mod:`undid.design.ri` - randomization-inference rows cloned from a
  reference control silo.
* :mod:`undid.design.assembly` - trailing metadata columns and the CSV
  round trip.

:func:`select_design` picks between the two designs once, up front.
"""

from .base import CommonDesign, Design, StaggeredDesign, select_design
from .assembly import (
    COMMON_COLUMNS,
    STAGGERED_COLUMNS,
    attach_metadata,
    read_diff_df,
    write_diff_df,
)

__all__ = [
    "CommonDesign",
    "StaggeredDesign",
    "Design",
    "select_design",
    "COMMON_COLUMNS",
    "STAGGERED_COLUMNS",
    "attach_metadata",
    "read_diff_df",
    "write_diff_df",
]
