#!/usr/bin/env python3
"""
wage_price_plots.py

Draws the three wheat price / wages figures from one CSV:

  chart   Playfair-style reproduction: wheat bars + wage area on one scale
  chart2  wheat (left axis) vs wages (right axis), wage line broken at gaps
  chart3  purchasing power: quarters of wheat per week of wages

Hovering any plot area shows the nearest year's values.

USAGE
-----
python wage_price_plots.py --csv data/wheat_wages.csv

Save PNGs (and the record tables) without opening windows:
  python wage_price_plots.py --csv data/wheat_wages.csv --outdir figs --tables --no-show
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt

from wage_price_charts import render_all
from wage_price_data import (
    LOAD_FAILURE_MESSAGE,
    DataLoadFailure,
    DerivedRecord,
    derive_purchasing_power,
    load_records,
    records_to_frame,
)
from wage_price_hover import Tooltip

logger = logging.getLogger("wage_price_plots")


def savefig(fig, outdir: Path, name: str, dpi: int) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / name
    fig.savefig(path, dpi=dpi)
    logger.info("Saved: %s", path)
    return path


def write_tables(records, outdir: Path) -> None:
    outdir.mkdir(parents=True, exist_ok=True)
    tables = {
        "records.csv": records_to_frame(records),
        "purchasing_power.csv": records_to_frame(derive_purchasing_power(records), kind=DerivedRecord),
    }
    for name, df in tables.items():
        df.to_csv(outdir / name, index=False, encoding="utf-8-sig")
        logger.info("Saved: %s", outdir / name)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Wheat prices, wages and purchasing power charts.")
    ap.add_argument("--csv", default="data/wheat_wages.csv", help="Input CSV with Year, Wheat, Wages columns")
    ap.add_argument("--outdir", default="", help="Save chart PNGs here (optional)")
    ap.add_argument("--dpi", type=int, default=160, help="PNG resolution")
    ap.add_argument("--tables", action="store_true", help="Also write records/purchasing-power CSVs to --outdir")
    ap.add_argument("--no-show", action="store_true", help="Do not open interactive windows")
    ap.add_argument("--debug", action="store_true", help="Verbose logging")
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s: %(message)s")

    try:
        records = load_records(args.csv)
    except DataLoadFailure as err:
        logger.error("%s", err)
        raise SystemExit(LOAD_FAILURE_MESSAGE) from err

    logger.info("Loaded %d records (%s)", len(records), args.csv)

    tooltip = Tooltip()
    renderers = render_all(records, tooltip)

    if args.outdir:
        outdir = Path(args.outdir)
        for r in renderers:
            savefig(r.figure, outdir, f"{r.target_id}.png", args.dpi)
        if args.tables:
            write_tables(records, outdir)
    elif args.tables:
        logger.warning("--tables needs --outdir; skipping tables.")

    if not args.no_show:
        plt.show()


if __name__ == "__main__":
    main()
