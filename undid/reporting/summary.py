# summary.py
from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from ..helpers.utils import split_subfields

# ================================
# Formatting helpers
# ================================

def _rule(title: str | None = None) -> None:
    line = "=" * 78
    if title:
        print(f"\n{line}\n{title}\n{line}")
    else:
        print(f"\n{line}")


def _design_kind(diff_df: pd.DataFrame) -> str:
    return "staggered" if "gt" in diff_df.columns else "common"


def _first(diff_df: pd.DataFrame, col: str) -> str:
    if col not in diff_df.columns or diff_df.empty:
        return "NA"
    return str(diff_df[col].iloc[0])


# ================================
# Summary table
# ================================

def diff_df_overview(diff_df: pd.DataFrame) -> Dict[str, Any]:
    """Counts describing a specification table (design, silos, cohorts, rows)."""
    kind = _design_kind(diff_df)
    treat = diff_df["treat"].astype(str)
    info: Dict[str, Any] = {
        "design": kind,
        "n_rows": int(len(diff_df)),
        "n_silos": int(diff_df["silo_name"].nunique()),
        "n_treated": int(diff_df.loc[treat == "1", "silo_name"].nunique()),
        "n_control": int(diff_df.loc[treat == "0", "silo_name"].nunique()),
        "date_format": _first(diff_df, "date_format"),
        "freq": _first(diff_df, "freq"),
        "covariates": split_subfields(_first(diff_df, "covariates")),
    }
    if kind == "staggered":
        primary = diff_df[diff_df["RI"].astype(int) == 0]
        info["cohorts"] = list(dict.fromkeys(primary["gvar"].astype(str)))
        info["n_ri_rows"] = int((diff_df["RI"].astype(int) == 1).sum())
        info["rows_per_silo"] = (
            diff_df.groupby(["silo_name", "treat"], sort=False).size().rename("rows").reset_index()
        )
    else:
        info["cohorts"] = [_first(diff_df, "common_treatment_time")]
        info["n_ri_rows"] = 0
        info["rows_per_silo"] = diff_df[["silo_name", "treat"]].assign(rows=1)
    return info


def print_diff_summary(diff_df: pd.DataFrame) -> Dict[str, Any]:
    """Print a concise overview of a specification table and return it."""
    info = diff_df_overview(diff_df)

    _rule("DIFFERENCE SPECIFICATION")
    print(f"Design:        {info['design']} adoption")
    print(f"Silos:         {info['n_silos']} (treated={info['n_treated']}, control={info['n_control']})")
    print(f"Cohorts:       {', '.join(info['cohorts'])}")
    print(f"Frequency:     {info['freq']}   Date format: {info['date_format']}")
    covs = info["covariates"]
    print(f"Covariates:    {', '.join(covs) if covs else 'none'}")
    print(f"Rows:          {info['n_rows']} (RI rows: {info['n_ri_rows']})")

    _rule("Rows per silo")
    with pd.option_context("display.max_rows", 50, "display.width", 120):
        print(info["rows_per_silo"].to_string(index=False))
    _rule()
    return info


__all__ = ["diff_df_overview", "print_diff_summary"]
