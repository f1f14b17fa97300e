"""High level orchestration of a stability analysis."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd

from .config import AnalysisConfig
from .data import load_series
from .deviations import ESTIMATORS, DeviationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    config: AnalysisConfig
    samples: np.ndarray
    results: Dict[str, DeviationResult]

    def to_frame(self) -> pd.DataFrame:
        frames = []
        for name, result in self.results.items():
            df = result.to_frame()
            df.insert(0, "estimator", name)
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=["estimator", "tau", "deviation", "error", "count"])
        return pd.concat(frames, ignore_index=True)


def run_analysis(series: np.ndarray, config: AnalysisConfig) -> AnalysisResult:
    """Evaluate every configured estimator on *series*."""

    config.validate()
    results: Dict[str, DeviationResult] = {}
    for name in config.estimators:
        estimator = ESTIMATORS[name]
        result = estimator(
            series,
            config.rate,
            frequency=config.frequency,
            overlapping=config.overlapping,
            taus=config.taus,
        )
        logger.info("%s: %d tau value(s) evaluated", name, len(result))
        results[name] = result
    return AnalysisResult(config=config, samples=np.asarray(series, dtype=float), results=results)


def run_analysis_file(path: str | Path, config: AnalysisConfig) -> AnalysisResult:
    """Load a series from *path* and analyse it."""

    series = load_series(path, column=config.column)
    logger.info("Loaded %d samples from %s", series.size, path)
    return run_analysis(series, config)
