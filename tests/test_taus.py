from __future__ import annotations

import numpy as np
import pytest

from allandeviations.taus import TauSpacing, parse_taus, tau_clusters


def test_all_taus_are_dense() -> None:
    assert tau_clusters(TauSpacing.ALL, 1.0, 10).tolist() == list(range(1, 9))


@pytest.mark.parametrize(
    ("spacing", "n", "expected"),
    [
        (TauSpacing.OCTAVE, 10, [1, 2, 4, 8]),
        (TauSpacing.OCTAVE, 8, [1, 2, 4, 8]),
        (TauSpacing.DECADE, 1000, [1, 10, 100, 1000]),
        (TauSpacing.DECADE, 999, [1, 10, 100]),
        (TauSpacing.HALF_DECADE, 125, [1, 5, 25, 125]),
        (TauSpacing.HALF_OCTAVE, 10, [1, 2, 3, 5, 7]),
        (TauSpacing.QUARTER_OCTAVE, 5, [1, 2, 3, 4]),
    ],
)
def test_log_spacings(spacing: TauSpacing, n: int, expected: list[int]) -> None:
    assert tau_clusters(spacing, 1.0, n).tolist() == expected


def test_spacing_accepts_string_value() -> None:
    assert tau_clusters("half-decade", 1.0, 30).tolist() == [1, 5, 25]


def test_custom_base_floors_and_deduplicates() -> None:
    assert tau_clusters(3.0, 1.0, 30).tolist() == [1, 3, 9, 27]
    m = tau_clusters(1.1, 1.0, 50)
    assert m[0] == 1
    assert np.all(np.diff(m) > 0)
    assert m[-1] <= 50


@pytest.mark.parametrize("base", [1.0, 0.5, -2.0])
def test_custom_base_must_exceed_one(base: float) -> None:
    with pytest.raises(ValueError, match="greater than 1.0"):
        tau_clusters(base, 1.0, 100)


def test_explicit_taus_in_seconds() -> None:
    m = tau_clusters([3.0, 0.1, 0.5, 1.0, 1.2, 3.0], 2.0, 100)
    assert m.tolist() == [1, 2, 6]


def test_explicit_taus_may_be_empty() -> None:
    assert tau_clusters([0.1, 0.2], 1.0, 100).size == 0


def test_generation_is_deterministic() -> None:
    for spacing in TauSpacing:
        first = tau_clusters(spacing, 1.0, 777)
        second = tau_clusters(spacing, 1.0, 777)
        assert np.array_equal(first, second)
        assert np.unique(first).size == first.size
        assert np.all(np.diff(first) > 0)


def test_parse_taus() -> None:
    assert parse_taus("Decade") is TauSpacing.DECADE
    assert parse_taus("quarter-octave") is TauSpacing.QUARTER_OCTAVE
    assert parse_taus("1.7") == pytest.approx(1.7)
    assert parse_taus("1, 10,100") == [1.0, 10.0, 100.0]
    with pytest.raises(ValueError):
        parse_taus("fortnightly")
