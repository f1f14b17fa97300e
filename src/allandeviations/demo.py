"""Demo dataset utilities."""
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from .config import AnalysisConfig
from .pipeline import run_analysis_file
from .plotting import generate_plots
from .reporting import export_results

logger = logging.getLogger(__name__)


def create_demo_dataset(samples: int = 4096, rate: float = 10.0) -> pd.DataFrame:
    """White phase noise on top of random-walk frequency noise."""

    rng = np.random.default_rng(42)
    white_phase = rng.normal(scale=1e-9, size=samples)
    random_walk_freq = np.cumsum(rng.normal(scale=1e-12, size=samples))
    phase = white_phase + np.cumsum(random_walk_freq) / rate
    time_s = np.arange(samples) / rate
    return pd.DataFrame({"time_s": time_s, "phase_s": phase})


def run_demo(out_dir: Path, rate: float = 10.0) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "demo_data.csv"
    df = create_demo_dataset(rate=rate)
    df.to_csv(csv_path, index=False)

    config = AnalysisConfig(rate=rate, column="phase_s")
    result = run_analysis_file(csv_path, config)
    figure_path = None
    try:
        figure_path = generate_plots(result, out_dir)
    except RuntimeError as exc:
        logger.warning("plotting skipped: %s", exc)

    export_results(result, out_dir, figure_path=figure_path, input_path=csv_path)
