# undid/diff_df.py

from __future__ import annotations

import os
from typing import Optional, Sequence, Union

import pandas as pd

from .helpers.config import DiffConfig
from .helpers.dates import check_step_granularity, resolve_date_format
from .helpers.defaults import CalendarTables, DEFAULT_TABLES
from .helpers.frequency import resolve_frequency
from .helpers.preparation import filename_filepath_check, prepare_roster, read_init
from .helpers.utils import log_step, resolve_covariates
from .design.assembly import COMMON_COLUMNS, STAGGERED_COLUMNS, attach_metadata, write_diff_df
from .design.base import Design, StaggeredDesign, select_design


class DiffDfBuilder:
    """Builds the ``empty_diff_df`` for one roster and one configuration."""

    def __init__(self, config: DiffConfig, tables: CalendarTables = DEFAULT_TABLES) -> None:
        self.config = config.copy()
        self.tables = tables
        self._design: Optional[Design] = None

    @property
    def design(self) -> Design:
        if self._design is None:
            raise RuntimeError("Design not selected yet. Call .build().")
        return self._design

    def _log(self, tag: str, message: str) -> None:
        log_step(tag, message, verbose=self.config.verbose)

    def build(self, init: Union[str, os.PathLike, pd.DataFrame]) -> pd.DataFrame:
        """
        Validate ``init`` and return the specification table.

        Parameters
        ----------
        init : str, path-like or pandas.DataFrame
            Path to an ``init.csv`` or an already loaded roster.

        Returns
        -------
        pandas.DataFrame
            The specification table; also written to
            ``config.filepath/config.filename`` when ``filepath`` is set.
        """
        cfg = self.config
        tables = self.tables

        # 1) Everything that can fail is checked before any row exists
        if cfg.filepath is not None:
            filename_filepath_check(cfg.filename, cfg.filepath)
        raw = init if isinstance(init, pd.DataFrame) else read_init(init)
        date_format = resolve_date_format(cfg.date_format, tables)
        step = resolve_frequency(cfg.freq, cfg.freq_multiplier, tables)
        check_step_granularity(date_format, step, tables)
        roster = prepare_roster(raw, date_format, tables, verbose=cfg.verbose)
        self._design = select_design(
            roster,
            step,
            weights=cfg.weights,
            randomization_inference=cfg.randomization_inference,
            tables=tables,
            verbose=cfg.verbose,
        )

        # 2) Rows
        df = self.design.build(tables)
        self._log("build", f"{len(df)} rows ({self.design.kind})")

        # 3) Uniform trailing columns
        df = attach_metadata(
            df,
            covariates=resolve_covariates(cfg.covariates, roster.frame),
            date_format=date_format,
            freq=str(step),
        )
        columns = STAGGERED_COLUMNS if isinstance(self.design, StaggeredDesign) else COMMON_COLUMNS
        df = df[columns]

        # 4) Persist
        if cfg.filepath is not None:
            write_diff_df(df, cfg.filename, cfg.filepath)
        return df


def create_diff_df(
    init: Union[str, os.PathLike, pd.DataFrame],
    date_format: str,
    freq: str,
    covariates: Union[Sequence[str], bool, None] = False,
    freq_multiplier: Union[int, bool, None] = False,
    weights: str = "standard",
    filename: str = "empty_diff_df.csv",
    filepath: Optional[Union[str, os.PathLike]] = None,
    *,
    randomization_inference: bool = True,
    verbose: bool = False,
    tables: CalendarTables = DEFAULT_TABLES,
) -> pd.DataFrame:
    """Create the ``empty_diff_df`` listing every difference each silo must compute.

    The table is sent to every silo, which fills in the estimate columns of
    its own rows.  Dates in the roster must all use ``date_format``; call
    :func:`undid.helpers.dates.undid_date_formats` for the options.
    Covariates passed here override the roster's ``covariates`` column.

    Parameters
    ----------
    init : str, path-like or pandas.DataFrame
        The ``init.csv`` roster (``silo_name``, ``start_time``, ``end_time``,
        ``treatment_time`` and optionally ``covariates``).
    date_format : str
        Date format used in the roster.
    freq : str
        ``"yearly"``, ``"monthly"``, ``"weekly"`` or ``"daily"``.
    covariates : list of str or False, default False
        Explicit covariates; ``False`` uses the roster's.
    freq_multiplier : int or False, default False
        Multiply the frequency by a positive integer.
    weights : str, default "standard"
        Weighting for common adoption.  Only ``"standard"`` is defined.
    filename : str, default "empty_diff_df.csv"
        Output file name (must end in ``.csv``).
    filepath : str or None
        Output directory; ``None`` skips writing.
    randomization_inference : bool, default True
        Add RI rows to staggered designs.

    Returns
    -------
    pandas.DataFrame
        The specification table.
    """
    cfg = DiffConfig(
        date_format=date_format,
        freq=freq,
        freq_multiplier=freq_multiplier,
        covariates=list(covariates) if isinstance(covariates, (list, tuple)) else covariates,
        weights=weights,
        randomization_inference=randomization_inference,
        filename=filename,
        filepath=None if filepath is None else str(filepath),
        verbose=verbose,
    )
    return DiffDfBuilder(cfg, tables).build(init)


__all__ = ["DiffDfBuilder", "create_diff_df"]
