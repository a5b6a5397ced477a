"""Calendar model.

Silos and the coordinating site exchange dates as plain strings written
in one declared format (see :func:`undid_date_formats`).  This module
turns those strings into :class:`pandas.Timestamp` objects and back, and
generates the period grids the design builders work with.

Step arithmetic uses :class:`pandas.DateOffset`, so a one-month step back
from 31 March lands on the last day of February and a one-year step
respects leap years, instead of subtracting a fixed number of days.
"""

from __future__ import annotations

import re
from typing import List

import pandas as pd

from .defaults import CalendarTables, DEFAULT_TABLES
from .errors import FormatError, FrequencyError
from .frequency import FreqStep

_YEAR_MONTH_RE = re.compile(r"^(\d{4})m(\d{1,2})$", re.IGNORECASE)
_DAY_MON_YEAR_RE = re.compile(r"^(\d{1,2})([a-z]{3})(\d{4})$", re.IGNORECASE)


def undid_date_formats(tables: CalendarTables = DEFAULT_TABLES) -> List[str]:
    """Return the date-format tokens accepted in an ``init.csv``."""
    return list(tables.date_formats)


def resolve_date_format(date_format: str, tables: CalendarTables = DEFAULT_TABLES) -> str:
    """Return the canonical token for ``date_format``.

    Both tokens (``"yyyy-mm-dd"``) and their strftime spelling
    (``"%Y-%m-%d"``) are accepted.
    """
    raw = str(date_format).strip()
    if raw.lower() in tables.date_formats:
        return raw.lower()
    if raw in tables.strftime_to_token:
        return tables.strftime_to_token[raw]
    raise FormatError(
        f"Unsupported date format {date_format!r}. "
        f"Choose one of: {', '.join(undid_date_formats(tables))}."
    )


def parse_date(value: str, date_format: str, tables: CalendarTables = DEFAULT_TABLES) -> pd.Timestamp:
    """Parse ``value`` written in ``date_format``.

    Year-only formats resolve to January 1st and year-month formats to the
    first of the month.

    Raises
    ------
    FormatError
        If the string cannot be read under the declared format.
    """
    token = resolve_date_format(date_format, tables)
    text = str(value).strip()

    if token == "yyyym00":
        m = _YEAR_MONTH_RE.match(text)
        if m is None or not 1 <= int(m.group(2)) <= 12:
            raise FormatError(f"Date {value!r} does not match format {token!r}.")
        return pd.Timestamp(year=int(m.group(1)), month=int(m.group(2)), day=1)

    if token == "ddmonyyyy":
        m = _DAY_MON_YEAR_RE.match(text)
        month = m.group(2).lower() if m else None
        if month not in tables.month_abbr:
            raise FormatError(f"Date {value!r} does not match format {token!r}.")
        try:
            return pd.Timestamp(year=int(m.group(3)), month=tables.month_abbr.index(month) + 1, day=int(m.group(1)))
        except ValueError as exc:
            raise FormatError(f"Date {value!r} does not match format {token!r}.") from exc

    pattern = tables.date_formats[token]
    try:
        return pd.to_datetime(text, format=pattern).normalize()
    except (ValueError, TypeError) as exc:
        raise FormatError(f"Date {value!r} does not match format {token!r}.") from exc


def format_date(ts: pd.Timestamp, date_format: str, tables: CalendarTables = DEFAULT_TABLES) -> str:
    """Write ``ts`` in ``date_format``; the inverse of :func:`parse_date`."""
    token = resolve_date_format(date_format, tables)
    ts = pd.Timestamp(ts)
    if token == "yyyym00":
        return f"{ts.year:04d}m{ts.month:02d}"
    if token == "ddmonyyyy":
        # fixed English abbreviations; strftime("%b") follows LC_TIME
        return f"{ts.day:02d}{tables.month_abbr[ts.month - 1]}{ts.year:04d}"
    return ts.strftime(tables.date_formats[token])


def check_step_granularity(date_format: str, step: FreqStep, tables: CalendarTables = DEFAULT_TABLES) -> None:
    """Reject steps finer than ``date_format`` can write.

    A year-only format cannot tell two months of the same year apart, so
    ``"yyyy"`` only allows yearly steps and the month formats only allow
    monthly or yearly ones.

    Raises
    ------
    FrequencyError
        If dates on the step grid would collapse when written.
    """
    token = resolve_date_format(date_format, tables)
    finest = tables.format_granularity[token]
    if tables.unit_order.index(step.unit) < tables.unit_order.index(finest):
        raise FrequencyError(
            f"Frequency {str(step)!r} is finer than date format {token!r} can record; "
            f"use steps of at least one {finest}, or a date format that records {step.unit}s."
        )


def date_sequence(start: pd.Timestamp, end: pd.Timestamp, step: FreqStep) -> List[pd.Timestamp]:
    """Dates ``start, start + step, ...`` up to and including ``end``.

    Each element is computed from ``start`` directly (``start + k*step``)
    so month-end anchors do not drift.  Empty when ``start > end``.
    """
    start = pd.Timestamp(start)
    end = pd.Timestamp(end)
    out: List[pd.Timestamp] = []
    k = 0
    while True:
        current = start + step.times(k)
        if current > end:
            break
        out.append(current)
        k += 1
    return out


def step_back(ts: pd.Timestamp, step: FreqStep) -> pd.Timestamp:
    """The date exactly one ``step`` before ``ts``."""
    return pd.Timestamp(ts) - step.offset


__all__ = [
    "undid_date_formats",
    "resolve_date_format",
    "parse_date",
    "format_date",
    "check_step_granularity",
    "date_sequence",
    "step_back",
]
