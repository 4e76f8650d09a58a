"""Fit an AR(p) model to one column of a CSV file and print the results."""

import argparse
import logging
import sys

import pandas as pd

from autoregressive_models.ar_model import fit

logger = logging.getLogger("autoregressive_models")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoregressive_models",
        description="Fit an autoregressive model by ordinary least squares."
    )
    parser.add_argument("csv", help="CSV file holding the time series")
    parser.add_argument("--column", required=True, help="column to fit")
    parser.add_argument("--order", type=int, required=True, help="number of lagged terms")
    parser.add_argument(
        "--predict", action="store_true",
        help="also print the one-step forecast from the last ORDER observations"
    )
    parser.add_argument("--json", action="store_true", help="print the model as JSON")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        df = pd.read_csv(args.csv)
    except FileNotFoundError:
        print(f"error: file {args.csv!r} not found", file=sys.stderr)
        return 1
    if args.column not in df.columns:
        print(f"error: column {args.column!r} not found in {args.csv}", file=sys.stderr)
        return 1
    y = df[args.column].dropna()
    logger.debug("read %d observations of %s", len(y), args.column)

    try:
        model = fit(y, args.order)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(model.to_json())
    else:
        print(model.summary())

    if args.predict:
        window = y.iloc[len(y) - model.order:]
        print(f"forecast: {model.predict(window):.6f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
