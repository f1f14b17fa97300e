"""Frequency to phase conversion."""
from __future__ import annotations

from typing import Sequence

import numpy as np


def frequency_to_phase(data: Sequence[float] | np.ndarray, rate: float) -> np.ndarray:
    """Integrate fractional frequency samples into a zero-seeded phase series.

    The result has one more sample than *data*; ``phase[0]`` is exactly zero
    and ``phase[k]`` is the sum of the first ``k`` frequency samples divided
    by *rate*.
    """

    frequency = np.asarray(data, dtype=float)
    phase = np.zeros(frequency.size + 1, dtype=float)
    np.cumsum(frequency, out=phase[1:])
    phase[1:] *= 1.0 / rate
    return phase
