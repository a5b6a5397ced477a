# undid/design/assembly.py
from __future__ import annotations

from typing import List, Optional, Union

import os
from pathlib import Path

import numpy as np
import pandas as pd

from ..helpers.preparation import filename_filepath_check

ESTIMATE_COLUMNS: List[str] = [
    "diff_estimate",
    "diff_var",
    "diff_estimate_covariates",
    "diff_var_covariates",
]
METADATA_COLUMNS: List[str] = ["covariates", "date_format", "freq"]

STAGGERED_COLUMNS: List[str] = (
    ["silo_name", "gvar", "treat", "diff_times", "gt", "RI", "start_time", "end_time"]
    + ESTIMATE_COLUMNS
    + METADATA_COLUMNS
)
COMMON_COLUMNS: List[str] = (
    ["silo_name", "treat", "common_treatment_time", "start_time", "end_time", "weights"]
    + ESTIMATE_COLUMNS
    + METADATA_COLUMNS
)


def attach_metadata(
    df: pd.DataFrame,
    *,
    covariates: str,
    date_format: str,
    freq: str,
) -> pd.DataFrame:
    """Add the empty estimate columns and the uniform trailing columns."""
    out = df.copy()
    for col in ESTIMATE_COLUMNS:
        out[col] = np.nan
    out["covariates"] = covariates
    out["date_format"] = date_format
    out["freq"] = freq
    return out.reset_index(drop=True)


def write_diff_df(
    df: pd.DataFrame,
    filename: str = "empty_diff_df.csv",
    filepath: Optional[Union[str, os.PathLike]] = None,
) -> Path:
    """Write a specification table as UTF-8 CSV; empty estimates stay blank."""
    directory = filename_filepath_check(filename, filepath)
    full_path = directory / filename
    df.to_csv(full_path, index=False, na_rep="", encoding="utf-8")
    print(f"{filename} saved to: {full_path}")
    return full_path


def read_diff_df(path: Union[str, os.PathLike]) -> pd.DataFrame:
    """Read a specification table written by :func:`write_diff_df`.

    Text columns come back as ``str`` exactly as written (dates are never
    reparsed); ``RI`` as int and the estimate columns as float.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    for col in ESTIMATE_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col].replace("", np.nan), errors="raise").astype(float)
    if "RI" in df.columns:
        df["RI"] = df["RI"].astype(int)
    return df


__all__ = [
    "ESTIMATE_COLUMNS",
    "METADATA_COLUMNS",
    "STAGGERED_COLUMNS",
    "COMMON_COLUMNS",
    "attach_metadata",
    "write_diff_df",
    "read_diff_df",
]
