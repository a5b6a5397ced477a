"""General utilities for building difference specifications.

Small helpers that do not belong to any single design builder: the
covariate resolution shared by both designs, the semicolon-joined
sub-field convention used by ``diff_times``, ``gt`` and ``covariates``,
and the bracket-tagged progress printer used across the package.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

SUBFIELD_SEP = ";"


def join_subfields(parts: Iterable[Any]) -> str:
    """Join ``parts`` with the semicolon separator used inside table cells."""
    return SUBFIELD_SEP.join(str(p) for p in parts)


def split_subfields(cell: Any) -> List[str]:
    """Inverse of :func:`join_subfields`; empty cells give an empty list."""
    if cell is None or (isinstance(cell, float) and pd.isna(cell)):
        return []
    text = str(cell).strip()
    if not text:
        return []
    return [p.strip() for p in text.split(SUBFIELD_SEP)]


def split_pair(cell: Any) -> Tuple[str, str]:
    """Split a two-part cell such as ``"1993;1992"``."""
    parts = split_subfields(cell)
    if len(parts) != 2:
        raise ValueError(f"Expected two ';'-separated values, got {cell!r}.")
    return parts[0], parts[1]


def resolve_covariates(
    covariates: Optional[Sequence[str]] | bool,
    roster: Optional[pd.DataFrame] = None,
    *,
    column: str = "covariates",
    fallback: str = "none",
) -> str:
    """Return the covariates cell attached to every row of the table.

    An explicit list wins; ``False``/``None`` falls back to the first
    non-empty value of the roster's ``covariates`` column, else ``"none"``.
    Duplicates and blank names are dropped, order is kept.
    """
    if covariates is None or covariates is False:
        if roster is None or column not in roster.columns:
            return fallback
        for cell in roster[column].tolist():
            names = split_subfields(cell)
            if names:
                return join_subfields(names)
        return fallback

    if isinstance(covariates, str):
        covariates = split_subfields(covariates)

    resolved: List[str] = []
    for term in covariates:
        if term is None:
            continue
        raw = str(term).strip()
        if raw and raw not in resolved:
            resolved.append(raw)
    return join_subfields(resolved) if resolved else fallback


def log_step(tag: str, message: str, *, verbose: bool = True) -> None:
    """Print a ``[undid][tag] message`` progress line."""
    if verbose:
        print(f"[undid][{tag}] {message}")


__all__ = [
    "SUBFIELD_SEP",
    "join_subfields",
    "split_subfields",
    "split_pair",
    "resolve_covariates",
    "log_step",
]
