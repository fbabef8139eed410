from __future__ import annotations

import logging
from pathlib import Path
import pandas as pd

from reskilling.config.constants import (
    CASES_TABLE,
    EVENTS_TABLE,
    FALSE_WORDS,
    OCCUPATIONS_TABLE,
    TRUE_WORDS,
)
from reskilling.models.schema import CASE_COLUMNS, EVENT_COLUMNS, OCCUPATION_COLUMNS

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """A source table could not be found or read."""


def load_table(data_dir: Path, name: str) -> pd.DataFrame:
    pkl_path = data_dir / f"{name}.pkl"
    csv_path = data_dir / f"{name}.csv"
    try:
        if pkl_path.exists():
            return pd.read_pickle(pkl_path)
        if csv_path.exists():
            return pd.read_csv(csv_path)
    except Exception as exc:
        raise DataLoadError(f"Could not read table {name!r} from {data_dir}: {exc}") from exc
    raise DataLoadError(f"Table {name!r} not found in {data_dir} (expected {name}.pkl or {name}.csv)")


def to_datetime(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], errors="coerce")
    return df


def to_nullable_int(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce")
    # Fractional ids are not ids.
    numeric = numeric.where(numeric.isna() | (numeric % 1 == 0))
    return numeric.astype("Int64")


def to_clean_text(series: pd.Series) -> pd.Series:
    text = series.astype("string").str.strip()
    return text.mask(text.fillna("") == "")


def to_nullable_bool(series: pd.Series) -> pd.Series:
    def _parse(value: object) -> object:
        if value is None or value is pd.NA:
            return pd.NA
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            if pd.isna(value):
                return pd.NA
            if value in (0, 1):
                return bool(value)
            return pd.NA
        text = str(value).strip().lower()
        if text in TRUE_WORDS:
            return True
        if text in FALSE_WORDS:
            return False
        return pd.NA

    return series.map(_parse).astype("boolean")


def conform(df: pd.DataFrame, columns: dict[str, str]) -> pd.DataFrame:
    """Return a copy of ``df`` holding every declared column, coerced by kind.

    Columns the source lacks are added as nulls; extra source columns are kept
    untouched.
    """
    df = df.copy()
    for col, kind in columns.items():
        if col not in df.columns:
            df[col] = pd.NA
        if kind == "id":
            df[col] = to_nullable_int(df[col])
        elif kind == "text":
            df[col] = to_clean_text(df[col])
        elif kind == "bool":
            df[col] = to_nullable_bool(df[col])
        elif kind == "number":
            df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
        elif kind == "date":
            df = to_datetime(df, [col])
    return df


def _drop_missing_ids(df: pd.DataFrame, id_col: str, table: str) -> pd.DataFrame:
    missing = df[id_col].isna()
    if missing.any():
        logger.warning("Dropping %d %s rows without %s", int(missing.sum()), table, id_col)
        df = df[~missing].reset_index(drop=True)
    return df


def normalize_cases(cases: pd.DataFrame) -> pd.DataFrame:
    cases = conform(cases, CASE_COLUMNS)
    return _drop_missing_ids(cases, "case_id", CASES_TABLE)


def normalize_events(events: pd.DataFrame) -> pd.DataFrame:
    return conform(events, EVENT_COLUMNS)


def normalize_occupations(occupations: pd.DataFrame) -> pd.DataFrame:
    occupations = conform(occupations, OCCUPATION_COLUMNS)
    occupations = _drop_missing_ids(occupations, "soc_code", OCCUPATIONS_TABLE)

    prob = occupations["automation_probability"]
    out_of_range = prob.notna() & ((prob < 0) | (prob > 1))
    if out_of_range.any():
        logger.warning(
            "Nulling %d automation probabilities outside [0, 1]",
            int(out_of_range.sum()),
        )
        occupations["automation_probability"] = prob.mask(out_of_range)
    return occupations


SOURCES = {
    "occupations": (OCCUPATIONS_TABLE, normalize_occupations),
    "cases": (CASES_TABLE, normalize_cases),
    "events": (EVENTS_TABLE, normalize_events),
}


def load_source(data_dir: Path, name: str) -> pd.DataFrame:
    table, normalize = SOURCES[name]
    df = normalize(load_table(data_dir, table))
    logger.info("Loaded %d %s rows", len(df), name)
    return df


def load_all(data_dir: Path) -> dict[str, pd.DataFrame]:
    return {name: load_source(data_dir, name) for name in SOURCES}
