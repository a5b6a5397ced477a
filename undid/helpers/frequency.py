"""Frequency resolution.

Turns a frequency name (``"yearly"``, ``"monthly"``, ``"weekly"`` or
``"daily"``) plus an optional integer multiplier into a :class:`FreqStep`,
the canonical step used to generate period grids.  The string form of a
step (``"1 year"``, ``"3 months"``) is what ends up in the ``freq`` column
of the specification table; :meth:`FreqStep.parse` reads it back.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any

import pandas as pd

from .defaults import CalendarTables, DEFAULT_TABLES
from .errors import FrequencyError


@dataclass(frozen=True)
class FreqStep:
    unit: str  # "year" | "month" | "week" | "day"
    count: int = 1

    @property
    def offset(self) -> pd.DateOffset:
        return self.times(1)

    def times(self, k: int) -> pd.DateOffset:
        """Offset covering ``k`` whole steps."""
        return pd.DateOffset(**{self.unit + "s": self.count * int(k)})

    def __str__(self) -> str:
        unit = self.unit if self.count == 1 else self.unit + "s"
        return f"{self.count} {unit}"

    @classmethod
    def parse(cls, text: str, tables: CalendarTables = DEFAULT_TABLES) -> "FreqStep":
        """Rebuild a step from its string form, e.g. ``"2 years"``."""
        parts = str(text).strip().lower().split()
        if len(parts) != 2:
            raise FrequencyError(f"Cannot read frequency {text!r}; expected '<count> <unit>'.")
        count_raw, unit = parts
        if unit.endswith("s"):
            unit = unit[:-1]
        if unit not in set(tables.freq_units.values()):
            raise FrequencyError(f"Unknown frequency unit in {text!r}.")
        try:
            count = int(count_raw)
        except ValueError as exc:
            raise FrequencyError(f"Cannot read frequency count in {text!r}.") from exc
        if count <= 0:
            raise FrequencyError(f"Frequency count must be positive, got {text!r}.")
        return cls(unit=unit, count=count)


def _resolve_multiplier(freq_multiplier: Any) -> int:
    if freq_multiplier is None or freq_multiplier is False:
        return 1
    # bool is an Integral, and True is never a meaningful multiplier
    if isinstance(freq_multiplier, bool):
        raise FrequencyError("Ensure `freq_multiplier` is set to `False` or a non-zero integer.")
    if isinstance(freq_multiplier, Integral):
        value = int(freq_multiplier)
    elif isinstance(freq_multiplier, Real) and float(freq_multiplier).is_integer():
        value = int(freq_multiplier)
    else:
        raise FrequencyError("Ensure `freq_multiplier` is set to `False` or a non-zero integer.")
    if value == 0:
        raise FrequencyError("Ensure `freq_multiplier` is set to `False` or a non-zero integer.")
    if value < 0:
        raise FrequencyError(f"`freq_multiplier` must be positive, got {value}.")
    return value


def resolve_frequency(
    freq: str,
    freq_multiplier: Any = None,
    tables: CalendarTables = DEFAULT_TABLES,
) -> FreqStep:
    """Normalise a frequency name and multiplier into a :class:`FreqStep`.

    Parameters
    ----------
    freq : str
        One of ``"yearly"``, ``"monthly"``, ``"weekly"``, ``"daily"``
        (case-insensitive).
    freq_multiplier : int, False or None
        ``False``/``None`` means a single unit.  Otherwise a positive
        integer; zero, negatives and non-integral numbers are rejected.
    tables : CalendarTables
        Lookup tables holding the frequency vocabulary.

    Raises
    ------
    FrequencyError
        If ``freq`` is not recognised or the multiplier is invalid.
    """
    key = str(freq).strip().lower()
    if key not in tables.freq_units:
        options = ", ".join(f"`\"{name}\"`" for name in tables.freq_units)
        raise FrequencyError(f"Choose: {options}. Got {freq!r}.")
    return FreqStep(unit=tables.freq_units[key], count=_resolve_multiplier(freq_multiplier))


__all__ = ["FreqStep", "resolve_frequency"]
