"""Default lookup tables for dates and frequencies.

The tables mirror the vocabulary coordinators use in their ``init.csv``
files: human date-format tokens such as ``"yyyy-mm-dd"`` (with their
strftime equivalents) and the four frequency names.  They are bundled in
a frozen :class:`CalendarTables` built once at import time
(``DEFAULT_TABLES``) and handed explicitly to the calendar and frequency
helpers, so a caller may pass a customised copy without touching module
state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

# token -> strftime pattern (``None`` for tokens strftime cannot express)
_DATE_FORMATS = {
    "yyyy/mm/dd": "%Y/%m/%d",
    "yyyy-mm-dd": "%Y-%m-%d",
    "yyyymmdd": "%Y%m%d",
    "yyyy/dd/mm": "%Y/%d/%m",
    "yyyy-dd-mm": "%Y-%d-%m",
    "yyyyddmm": "%Y%d%m",
    "dd/mm/yyyy": "%d/%m/%Y",
    "dd-mm-yyyy": "%d-%m-%Y",
    "ddmmyyyy": "%d%m%Y",
    "mm/dd/yyyy": "%m/%d/%Y",
    "mm-dd-yyyy": "%m-%d-%Y",
    "mmddyyyy": "%m%d%Y",
    "mm/yyyy": "%m/%Y",
    "mm-yyyy": "%m-%Y",
    "mmyyyy": "%m%Y",
    "yyyy": "%Y",
    "ddmonyyyy": "%d%b%Y",
    "yyyym00": None,
}

_FREQ_UNITS = {
    "yearly": "year",
    "monthly": "month",
    "weekly": "week",
    "daily": "day",
}

_WEIGHTS: Tuple[str, ...] = ("standard",)

# finest calendar unit a token can write without loss
_FORMAT_GRANULARITY = {token: "day" for token in _DATE_FORMATS}
_FORMAT_GRANULARITY.update({"yyyy": "year", "mm/yyyy": "month", "mm-yyyy": "month", "mmyyyy": "month", "yyyym00": "month"})

# units ordered from finest to coarsest
_UNIT_ORDER: Tuple[str, ...] = ("day", "week", "month", "year")

MONTH_ABBR: Tuple[str, ...] = (
    "jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec",
)


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class CalendarTables:
    """Immutable vocabulary shared by the calendar model and frequency resolver."""

    date_formats: Mapping[str, object] = field(default_factory=lambda: _frozen(_DATE_FORMATS))
    freq_units: Mapping[str, str] = field(default_factory=lambda: _frozen(_FREQ_UNITS))
    format_granularity: Mapping[str, str] = field(default_factory=lambda: _frozen(_FORMAT_GRANULARITY))
    unit_order: Tuple[str, ...] = _UNIT_ORDER
    month_abbr: Tuple[str, ...] = MONTH_ABBR
    weights: Tuple[str, ...] = _WEIGHTS

    @property
    def strftime_to_token(self) -> Mapping[str, str]:
        return MappingProxyType(
            {pattern: token for token, pattern in self.date_formats.items() if pattern}
        )


DEFAULT_TABLES = CalendarTables()

__all__ = ["CalendarTables", "DEFAULT_TABLES", "MONTH_ABBR"]
