# config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass
class DiffConfig:
    # =========================
    # Calendar
    # =========================
    # Any token from undid_date_formats() or its strftime equivalent.
    date_format: str = "yyyy"
    freq: str = "yearly"
    # False/None -> plain frequency; otherwise a positive integer.
    freq_multiplier: Union[int, bool, None] = False

    # =========================
    # Covariates & weights
    # =========================
    # False -> use the roster's own covariates column (or "none").
    covariates: Union[List[str], bool, None] = False
    weights: str = "standard"

    # =========================
    # Staggered adoption
    # =========================
    randomization_inference: bool = True

    # =========================
    # Artifacts
    # =========================
    filename: str = "empty_diff_df.csv"
    # None -> do not write a file.
    filepath: Optional[str] = None

    verbose: bool = False

    def copy(self) -> "DiffConfig":
        return DiffConfig(
            date_format=self.date_format,
            freq=self.freq,
            freq_multiplier=self.freq_multiplier,
            covariates=list(self.covariates) if isinstance(self.covariates, (list, tuple)) else self.covariates,
            weights=self.weights,
            randomization_inference=self.randomization_inference,
            filename=self.filename,
            filepath=self.filepath,
            verbose=self.verbose,
        )
