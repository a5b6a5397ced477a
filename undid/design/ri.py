"""Randomization-inference rows for staggered designs.

MacKinnon-Webb style randomization inference recomputes the aggregate
estimator under counterfactual treatment timings.  For that, every
treated silo must also report the differences a control silo reports for
every *other* cohort.  This module clones those control rows onto each
treated silo, tagging them ``treat="-1"`` and ``RI=1``.

The reference control silo is the lexicographically smallest control
``silo_name``, so the output does not depend on roster row order.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import pandas as pd

from ..helpers.errors import NoControlSiloError


def reference_control_silo(silo_names: Iterable[str]) -> str:
    """Pick the reference control silo among ``silo_names``."""
    names = sorted(str(s) for s in silo_names)
    if not names:
        raise NoControlSiloError(
            "Randomization inference needs at least one control silo to clone "
            "comparisons from; the roster has none."
        )
    return names[0]


def augment_ri(df: pd.DataFrame, control_silo: Optional[str] = None) -> pd.DataFrame:
    """Append RI rows to the primary rows of a staggered design.

    Parameters
    ----------
    df : pandas.DataFrame
        Output of :func:`undid.design.staggered.build_staggered_rows`
        (columns ``silo_name, _g, treat, diff_times, gt, RI``).
    control_silo : str, optional
        Reference control silo; defaults to :func:`reference_control_silo`
        over the control rows of ``df``.

    Returns
    -------
    pandas.DataFrame
        ``df`` followed by one block of RI rows per treated silo, in order
        of first appearance.
    """
    if control_silo is None:
        control_silo = reference_control_silo(df.loc[df["treat"] == "0", "silo_name"].unique())
    control_rows = df[(df["silo_name"] == control_silo) & (df["treat"] == "0")]

    blocks: List[pd.DataFrame] = []
    treated = df[df["treat"] == "1"]
    for silo in treated["silo_name"].unique():
        g_s = treated.loc[treated["silo_name"] == silo, "_g"].iloc[0]
        clone = control_rows[control_rows["_g"] != g_s].copy()
        clone["silo_name"] = silo
        clone["treat"] = "-1"
        clone["RI"] = 1
        blocks.append(clone)

    if not blocks:
        return df.reset_index(drop=True)
    return pd.concat([df] + blocks, ignore_index=True)


__all__ = ["reference_control_silo", "augment_ri"]
