# -*- coding: utf-8 -*-
"""
wage_price_data.py

Loads the wheat price / weekly wage table and builds the record sequences the
charts draw from.

Input CSV (comma separated, header row):
    Year,Wheat,Wages
    1565,41,5
    ...
    1815,78,
    1820,54,

- Year and Wheat are required; rows missing either (or holding inf) are
  dropped silently.
- A repeated Year keeps its first row only.
- A blank, non-numeric or infinite Wages cell means "no wage data", never zero.
- Output is sorted ascending by Year.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# ============================================================
# CONFIG
# ============================================================
YEAR_COL = "Year"
WHEAT_COL = "Wheat"
WAGES_COL = "Wages"

# One quarter of wheat is taken as 6.8 kg of bread-wheat equivalent.
KG_PER_QUARTER = 6.8

LOAD_FAILURE_MESSAGE = (
    "Failed to load CSV. If you're opening the viewer from a local file, "
    "check the path (or run it next to the data, e.g. with a local server)."
)


class DataLoadFailure(Exception):
    """The input table could not be read or parsed."""


@dataclass(frozen=True)
class Record:
    year: int
    wheat: float
    wages: Optional[float] = None

    @property
    def has_wages(self) -> bool:
        return self.wages is not None


@dataclass(frozen=True)
class DerivedRecord:
    year: int
    wheat: float
    wages: float
    pp_quarters: float  # quarters of wheat per week of wages
    pp_kg: float


# ============================================================
# HELPERS
# ============================================================
def to_num(s: pd.Series) -> pd.Series:
    # "inf" / "-inf" parse as numbers; treat them like any other bad cell
    return pd.to_numeric(s, errors="coerce").replace([np.inf, -np.inf], np.nan)


def _optional_float(v) -> Optional[float]:
    if pd.isna(v):
        return None
    return float(v)


# ============================================================
# LOADING
# ============================================================
def normalize_records(df: pd.DataFrame) -> List[Record]:
    """
    Coerce, filter and sort a raw table into Records.

    Raises DataLoadFailure when the Year or Wheat column is missing. A missing
    Wages column is treated as "no wage data" for every row.
    """
    missing = [c for c in (YEAR_COL, WHEAT_COL) if c not in df.columns]
    if missing:
        raise DataLoadFailure(f"CSV is missing required column(s): {', '.join(missing)}")

    out = pd.DataFrame(
        {
            YEAR_COL: to_num(df[YEAR_COL]),
            WHEAT_COL: to_num(df[WHEAT_COL]),
            WAGES_COL: to_num(df[WAGES_COL]) if WAGES_COL in df.columns else float("nan"),
        }
    )

    before = len(out)
    out = out.dropna(subset=[YEAR_COL, WHEAT_COL])
    if len(out) < before:
        logger.debug("Dropped %d row(s) without a numeric %s/%s", before - len(out), YEAR_COL, WHEAT_COL)

    out = out.sort_values(YEAR_COL, kind="mergesort")

    before = len(out)
    out = out.drop_duplicates(subset=[YEAR_COL], keep="first")
    if len(out) < before:
        logger.debug("Dropped %d row(s) repeating an earlier %s", before - len(out), YEAR_COL)

    return [
        Record(
            year=int(r[YEAR_COL]),
            wheat=float(r[WHEAT_COL]),
            wages=_optional_float(r[WAGES_COL]),
        )
        for _, r in out.iterrows()
    ]


def load_records(source) -> List[Record]:
    """Read a CSV path or file-like object and return sorted Records."""
    try:
        df = pd.read_csv(source, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as err:
        raise DataLoadFailure(f"Could not read {source!r}: {err}") from err

    records = normalize_records(df)
    logger.debug("Loaded %d record(s) from %s", len(records), source)
    return records


# ============================================================
# DERIVED VIEWS
# ============================================================
def wage_records(records: Sequence[Record]) -> List[Record]:
    return [r for r in records if r.wages is not None]


def derive_purchasing_power(records: Sequence[Record]) -> List[DerivedRecord]:
    """
    Weekly wage divided by the price of a quarter of wheat.
    Rows without wages or with a zero price are dropped, not null-filled.
    """
    out: List[DerivedRecord] = []
    for r in records:
        if r.wages is None or r.wheat is None or r.wheat == 0:
            continue
        pp = r.wages / r.wheat
        out.append(
            DerivedRecord(
                year=r.year,
                wheat=r.wheat,
                wages=r.wages,
                pp_quarters=pp,
                pp_kg=pp * KG_PER_QUARTER,
            )
        )
    out.sort(key=lambda d: d.year)
    return out


def records_to_frame(records: Sequence[Union[Record, DerivedRecord]], kind=Record) -> pd.DataFrame:
    """Tabular view of Records or DerivedRecords (columns in field order)."""
    cols = [f.name for f in fields(records[0] if records else kind)]
    return pd.DataFrame([asdict(r) for r in records], columns=cols)
