"""Loading of sample series from delimited text files."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

WHITESPACE_SUFFIXES = {".txt", ".dat"}


def load_series(path: str | Path, column: Optional[str] = None) -> np.ndarray:
    """Load a uniformly sampled series from *path*.

    Parameters
    ----------
    path:
        CSV file with a header row, or a whitespace separated ``.txt`` /
        ``.dat`` file without header. Lines starting with ``#`` are ignored.
    column:
        Column holding the samples. Defaults to the last numeric column, so
        a two column ``time, value`` file works without configuration.

    Returns
    -------
    numpy.ndarray
        The samples as floats, with missing values removed.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() in WHITESPACE_SUFFIXES:
        df = pd.read_csv(path, sep=r"\s+", comment="#", header=None)
        df.columns = [str(idx) for idx in range(df.shape[1])]
    else:
        df = pd.read_csv(path, comment="#")

    if column is not None:
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not found; available: {list(df.columns)}")
        values = pd.to_numeric(df[column], errors="coerce")
    else:
        numeric = df.select_dtypes(include="number")
        if numeric.empty:
            raise ValueError(f"No numeric column found in {path}")
        values = numeric.iloc[:, -1]

    series = values.dropna().to_numpy(dtype=float)
    if series.size == 0:
        raise ValueError(f"No samples found in {path}")
    return series
