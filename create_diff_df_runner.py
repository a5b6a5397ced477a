"""CLI helper to build the empty_diff_df from an init.csv roster.

The roster must hold the columns ``silo_name``, ``start_time``,
``end_time`` and ``treatment_time`` (``control`` for untreated silos),
optionally ``covariates``.  The resulting table is written to
``--filepath/--filename`` and is what gets sent to every silo.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from undid import create_diff_df, undid_date_formats
from undid.reporting import print_diff_summary


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the empty_diff_df for an undid analysis")
    parser.add_argument("init", type=str, help="Path to the init.csv roster")
    parser.add_argument(
        "--date-format",
        type=str,
        required=True,
        help=f"Date format used in init.csv. One of: {', '.join(undid_date_formats())}",
    )
    parser.add_argument(
        "--freq",
        type=str,
        required=True,
        choices=["yearly", "monthly", "weekly", "daily"],
        help="Length of the periods differenced at each silo",
    )
    parser.add_argument(
        "--freq-multiplier",
        type=int,
        default=None,
        help="Optional positive integer multiplying the frequency (e.g. 2 -> '2 years')",
    )
    parser.add_argument(
        "--covariates",
        action="append",
        default=None,
        help="Covariate name; repeat the flag for several. Overrides init.csv covariates.",
    )
    parser.add_argument("--weights", type=str, default="standard", help="Weighting for common adoption")
    parser.add_argument("--filename", type=str, default="empty_diff_df.csv", help="Output CSV file name")
    parser.add_argument(
        "--filepath",
        type=str,
        default=".",
        help="Directory the CSV is written to (defaults to the current directory)",
    )
    parser.add_argument("--no-ri", action="store_true", help="Skip randomization-inference rows")
    parser.add_argument("--summary", action="store_true", help="Print an overview of the table")
    parser.add_argument("--verbose", action="store_true", help="Print progress lines")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        diff_df = create_diff_df(
            init=Path(args.init),
            date_format=args.date_format,
            freq=args.freq,
            covariates=args.covariates if args.covariates else False,
            freq_multiplier=args.freq_multiplier if args.freq_multiplier is not None else False,
            weights=args.weights,
            filename=args.filename,
            filepath=args.filepath,
            randomization_inference=not args.no_ri,
            verbose=args.verbose,
        )
    except (ValueError, FileNotFoundError) as exc:
        print(f"[undid] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 2
    if args.summary:
        print_diff_summary(diff_df)
    return 0


if __name__ == "__main__":
    sys.exit(main())
