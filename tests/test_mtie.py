from __future__ import annotations

import logging

import numpy as np
import pytest

from allandeviations.deviations import mtie
from allandeviations.taus import TauSpacing


def _brute_force_mtie(x: np.ndarray, m: int, stride: int) -> float:
    return max(float(np.ptp(x[i : i + m + 1])) for i in range(0, x.size - m, stride))


def test_unit_tau_on_increasing_series_is_largest_step() -> None:
    x = np.array([0.0, 1.0, 3.0, 4.0, 8.0, 9.0])
    result = mtie(x, 1.0, taus=[1.0])
    assert result.deviation.tolist() == [4.0]
    assert result.count.tolist() == [5]


@pytest.mark.parametrize("overlapping", [True, False])
def test_matches_brute_force_on_random_series(overlapping: bool) -> None:
    rng = np.random.default_rng(7)
    for trial in range(30):
        n = int(rng.integers(5, 80))
        if trial % 2:
            # small integer alphabet produces repeated extrema
            x = rng.integers(0, 4, size=n).astype(float)
        else:
            x = np.cumsum(rng.normal(size=n))
        result = mtie(x, 1.0, overlapping=overlapping, taus=TauSpacing.ALL)
        assert result.tau.size == n - 2
        for m, dev, count in zip(result.tau.astype(int), result.deviation, result.count):
            stride = 1 if overlapping else m
            assert count == n - m
            assert dev == _brute_force_mtie(x, m, stride)


def test_recurring_extremum_is_rescanned() -> None:
    x = np.array([5.0, 0.0, 5.0, 0.0, 1.0, 1.0, 1.0, 1.0])
    result = mtie(x, 1.0, taus=[2.0])
    assert result.deviation[0] == 5.0
    assert result.count[0] == 6


def test_error_is_deviation_over_sqrt_count() -> None:
    x = np.cumsum(np.random.default_rng(1).normal(size=64))
    result = mtie(x, 2.0)
    assert np.allclose(result.error, result.deviation / np.sqrt(result.count))
    assert np.allclose(result.tau * 2.0, [1, 2, 4, 8, 16, 32])


def test_two_samples_support_no_tau() -> None:
    assert len(mtie([0.0, 1.0], 1.0)) == 0


def test_non_overlapping_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="allandeviations.deviations"):
        result = mtie(np.arange(10, dtype=float), 1.0, overlapping=False)
    assert "mtie" in caplog.text
    assert len(result) > 0
