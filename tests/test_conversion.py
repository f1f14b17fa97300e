from __future__ import annotations

import numpy as np

from allandeviations.conversion import frequency_to_phase


def test_empty_frequency_gives_single_zero() -> None:
    phase = frequency_to_phase([], 1.0)
    assert phase.tolist() == [0.0]


def test_constant_frequency_integrates_to_ramp() -> None:
    frequency = np.full(8, 0.5)
    phase = frequency_to_phase(frequency, 2.0)
    assert phase.size == frequency.size + 1
    assert phase[0] == 0.0
    assert np.allclose(phase, np.arange(9) * 0.5 / 2.0)


def test_cumulative_sum_scaled_by_interval() -> None:
    frequency = np.array([1.0, -2.0, 4.0])
    phase = frequency_to_phase(frequency, 10.0)
    assert np.allclose(phase, [0.0, 0.1, -0.1, 0.3])
    assert frequency.tolist() == [1.0, -2.0, 4.0]
