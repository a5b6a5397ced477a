"""Error taxonomy for building difference specifications.

Every error raised while validating a roster or building a design is a
subclass of :class:`UndidError`, itself a :class:`ValueError`, so callers
can catch the whole family at once or react to a specific failure.  All of
them are terminal for the current build: they describe malformed input and
the roster has to be corrected and resubmitted.
"""

from __future__ import annotations


class UndidError(ValueError):
    """Base class for every validation failure in :mod:`undid`."""


class FormatError(UndidError):
    """A date string does not match the declared date format."""


class OrderingError(UndidError):
    """``start_time < treatment_time < end_time`` is violated for a treated silo."""


class FrequencyError(UndidError):
    """Unrecognised frequency name or invalid frequency multiplier."""


class CohortCountError(UndidError):
    """Too few distinct treatment values to choose a design."""


class NoControlSiloError(UndidError):
    """Randomization inference was requested but the roster has no control silo."""


class RosterError(UndidError):
    """The roster is structurally unusable (missing columns, duplicates, ...)."""


class WindowMismatchError(UndidError):
    """Silos of a staggered roster do not share one observation window."""


class WeightingError(UndidError):
    """Unrecognised weighting scheme."""


__all__ = [
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
