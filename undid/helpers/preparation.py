# undid/helpers/preparation.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import os
from pathlib import Path

import pandas as pd

from .defaults import CalendarTables, DEFAULT_TABLES
from .dates import parse_date
from .errors import OrderingError, RosterError, WindowMismatchError
from .utils import join_subfields, log_step

CONTROL = "control"
REQUIRED_COLUMNS = ("silo_name", "start_time", "end_time", "treatment_time")


# ----------------------------
# Records
# ----------------------------
@dataclass(frozen=True)
class SiloRecord:
    silo_name: str
    treatment_time: Optional[pd.Timestamp]  # None for control silos
    start_time: pd.Timestamp
    end_time: pd.Timestamp
    covariates: Optional[str] = None

    @property
    def is_control(self) -> bool:
        return self.treatment_time is None


@dataclass
class Roster:
    """
    Parsed ``init.csv``: one :class:`SiloRecord` per silo, in file order.

    ``frame`` keeps the raw string table (after whitespace stripping and
    lower-casing of ``treatment_time``) for anything that wants to look at
    the original cells, e.g. covariate resolution.
    """

    records: List[SiloRecord]
    date_format: str
    frame: pd.DataFrame = field(repr=False, default_factory=pd.DataFrame)

    @property
    def controls(self) -> List[SiloRecord]:
        return [r for r in self.records if r.is_control]

    @property
    def treated(self) -> List[SiloRecord]:
        return [r for r in self.records if not r.is_control]

    @property
    def cohorts(self) -> List[pd.Timestamp]:
        """Sorted distinct treatment dates."""
        return sorted({r.treatment_time for r in self.treated})

    @property
    def n_treatment_values(self) -> int:
        """Distinct treatment values, the control sentinel counted once."""
        return len(self.cohorts) + (1 if self.controls else 0)

    def shared_window(self) -> Tuple[pd.Timestamp, pd.Timestamp]:
        """The single ``(start_time, end_time)`` every silo must share."""
        windows = {(r.start_time, r.end_time) for r in self.records}
        if len(windows) != 1:
            names = ", ".join(
                f"{r.silo_name}={r.start_time.date()}..{r.end_time.date()}" for r in self.records
            )
            raise WindowMismatchError(
                "Staggered adoption needs one shared start_time/end_time for all silos; "
                f"found {len(windows)} distinct windows ({names})."
            )
        return next(iter(windows))


# ----------------------------
# Reading & checks
# ----------------------------
def _normalise_frame(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip() for c in out.columns]
    for col in out.columns:
        out[col] = out[col].map(lambda v: "" if pd.isna(v) else str(v).strip())
    if "treatment_time" in out.columns:
        out["treatment_time"] = out["treatment_time"].str.lower()
    return out


def read_init(path: Union[str, os.PathLike]) -> pd.DataFrame:
    """Read an ``init.csv`` keeping every cell as a string."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    return _normalise_frame(df)


def init_checks(df: pd.DataFrame) -> None:
    """Structural checks on a raw roster; raises :class:`RosterError`."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise RosterError(f"init.csv is missing required column(s): {', '.join(missing)}.")
    if df.empty:
        raise RosterError("init.csv has no silos.")
    for col in REQUIRED_COLUMNS:
        blank = df.loc[df[col].astype(str).str.strip() == "", "silo_name"].tolist()
        if blank:
            raise RosterError(f"Column `{col}` has empty values (rows: {blank}).")
    dupes = df.loc[df["silo_name"].duplicated(), "silo_name"].unique().tolist()
    if dupes:
        raise RosterError(f"`silo_name` values must be unique; duplicated: {dupes}.")


def start_treat_end_time_check(records: Sequence[SiloRecord]) -> None:
    """Require ``start_time < treatment_time < end_time`` for treated silos
    and ``start_time < end_time`` for everyone."""
    for r in records:
        if r.start_time >= r.end_time:
            raise OrderingError(
                f"Silo {r.silo_name!r}: start_time must be earlier than end_time."
            )
        if r.is_control:
            continue
        if not r.start_time < r.treatment_time < r.end_time:
            raise OrderingError(
                f"Silo {r.silo_name!r}: ensure start_time < treatment_time < end_time."
            )


def prepare_roster(
    df: pd.DataFrame,
    date_format: str,
    tables: CalendarTables = DEFAULT_TABLES,
    *,
    verbose: bool = False,
) -> Roster:
    """Validate a raw roster and parse its dates into a :class:`Roster`.

    Raises
    ------
    RosterError
        Missing columns, empty cells or duplicated silo names.
    FormatError
        A date does not match ``date_format``.
    OrderingError
        ``start_time < treatment_time < end_time`` is violated.
    """
    frame = _normalise_frame(df)
    init_checks(frame)

    has_covariates = "covariates" in frame.columns
    records: List[SiloRecord] = []
    for row in frame.itertuples(index=False):
        treat_raw = row.treatment_time
        records.append(
            SiloRecord(
                silo_name=row.silo_name,
                treatment_time=None if treat_raw == CONTROL else parse_date(treat_raw, date_format, tables),
                start_time=parse_date(row.start_time, date_format, tables),
                end_time=parse_date(row.end_time, date_format, tables),
                covariates=(getattr(row, "covariates") or None) if has_covariates else None,
            )
        )
    start_treat_end_time_check(records)

    roster = Roster(records=records, date_format=date_format, frame=frame)
    log_step(
        "prepare",
        f"{len(records)} silos; controls={len(roster.controls)}, cohorts={len(roster.cohorts)}",
        verbose=verbose,
    )
    return roster


# ----------------------------
# Writing
# ----------------------------
def filename_filepath_check(filename: str, filepath: Optional[Union[str, os.PathLike]]) -> Path:
    """Validate an output location and return the directory to write into."""
    if not str(filename).lower().endswith(".csv"):
        raise ValueError(f"`filename` must end in '.csv', got {filename!r}.")
    directory = Path(filepath) if filepath is not None else Path.cwd()
    if not directory.is_dir():
        raise ValueError(f"`filepath` {str(directory)!r} is not an existing directory.")
    return directory


def _broadcast(values: Union[str, Sequence[str]], n: int, name: str) -> List[str]:
    if isinstance(values, str):
        return [values] * n
    values = [str(v) for v in values]
    if len(values) == 1:
        return values * n
    if len(values) != n:
        raise RosterError(f"`{name}` has {len(values)} entries but there are {n} silos.")
    return values


def create_init_csv(
    silo_names: Sequence[str],
    start_times: Union[str, Sequence[str]],
    end_times: Union[str, Sequence[str]],
    treatment_times: Sequence[str],
    covariates: Union[Sequence[str], bool, None] = False,
    filename: str = "init.csv",
    filepath: Optional[Union[str, os.PathLike]] = None,
) -> pd.DataFrame:
    """Build the roster a coordinator fills in before :func:`create_diff_df`.

    Scalar ``start_times``/``end_times`` apply to every silo.  With a
    ``filepath`` the frame is also written to ``filepath/filename``.
    """
    names = [str(s) for s in silo_names]
    n = len(names)
    if n == 0:
        raise RosterError("Provide at least one silo name.")
    df = pd.DataFrame(
        {
            "silo_name": names,
            "start_time": _broadcast(start_times, n, "start_times"),
            "end_time": _broadcast(end_times, n, "end_times"),
            "treatment_time": _broadcast(list(treatment_times), n, "treatment_times"),
        }
    )
    if covariates is not None and covariates is not False:
        cov = covariates if isinstance(covariates, str) else join_subfields(covariates)
        df["covariates"] = cov
    init_checks(_normalise_frame(df))

    if filepath is not None:
        directory = filename_filepath_check(filename, filepath)
        full_path = directory / filename
        df.to_csv(full_path, index=False, encoding="utf-8")
        print(f"{filename} saved to: {full_path}")
    return df


__all__ = [
    "CONTROL",
    "SiloRecord",
    "Roster",
    "read_init",
    "init_checks",
    "start_treat_end_time_check",
    "prepare_roster",
    "filename_filepath_check",
    "create_init_csv",
]
