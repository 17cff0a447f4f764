from pathlib import Path

import pandas as pd

PARQUET_SUFFIXES = (".parquet", ".pq")
CSV_SUFFIXES = (".csv",)


def _suffix(path) -> str:
    suffix = Path(path).suffix.lower()
    if suffix not in PARQUET_SUFFIXES + CSV_SUFFIXES:
        raise ValueError(f"unsupported table format {suffix or '(none)'!r}; use .csv or .parquet")
    return suffix


def read_df(path) -> pd.DataFrame:
    """Candidate/projection table from CSV or parquet (parquet needs pyarrow)."""
    if _suffix(path) in PARQUET_SUFFIXES:
        return pd.read_parquet(path)
    return pd.read_csv(path)


def write_df(df: pd.DataFrame, path) -> str:
    suffix = _suffix(path)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if suffix in PARQUET_SUFFIXES:
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)
    return str(path)
