"""Cluster size ("m") generation for the deviation estimators."""
from __future__ import annotations

import enum
import math
from numbers import Real
from typing import Sequence, Union

import numpy as np


class TauSpacing(str, enum.Enum):
    ALL = "all"
    DECADE = "decade"
    HALF_DECADE = "half-decade"
    OCTAVE = "octave"
    HALF_OCTAVE = "half-octave"
    QUARTER_OCTAVE = "quarter-octave"


TauDescriptor = Union[TauSpacing, str, float, Sequence[float]]

_INTEGER_BASES = {
    TauSpacing.DECADE: 10,
    TauSpacing.HALF_DECADE: 5,
    TauSpacing.OCTAVE: 2,
}
_FRACTIONAL_BASES = {
    TauSpacing.HALF_OCTAVE: 1.5,
    TauSpacing.QUARTER_OCTAVE: 1.25,
}


def tau_clusters(taus: TauDescriptor, rate: float, n: int) -> np.ndarray:
    """Return the increasing, duplicate-free cluster sizes to evaluate.

    Parameters
    ----------
    taus:
        A :class:`TauSpacing` (or its string value), a real number > 1.0
        used as a custom log-scale base, or a sequence of taus in seconds.
    rate:
        Sample rate of the series in Hz.
    n:
        Length of the (phase) series.

    Power-law spacings may contain cluster sizes too large for a given
    estimator; those are dropped by the estimator sweep, not here.
    """

    if isinstance(taus, str):
        taus = TauSpacing(taus)

    if isinstance(taus, TauSpacing):
        if taus is TauSpacing.ALL:
            return np.arange(1, n - 1, dtype=int)
        if taus in _INTEGER_BASES:
            return _integer_powers(_INTEGER_BASES[taus], n)
        return _floored_powers(_FRACTIONAL_BASES[taus], n)

    if isinstance(taus, Real) and not isinstance(taus, bool):
        base = float(taus)
        if base <= 1.0:
            raise ValueError("Custom tau log base must be greater than 1.0")
        return _floored_powers(base, n)

    seconds = np.asarray(taus, dtype=float)
    if seconds.ndim != 1:
        raise ValueError("Explicit taus must be a 1-D sequence of seconds")
    m = np.unique(np.floor(rate * seconds).astype(int))
    return m[m >= 1]


def parse_taus(text: str) -> TauDescriptor:
    """Interpret a CLI/config token as a tau descriptor.

    ``"octave"`` -> spacing, ``"1.7"`` -> custom base, ``"1,10,100"`` ->
    explicit taus in seconds.
    """

    token = text.strip()
    if not token:
        raise ValueError("Tau descriptor may not be empty")
    try:
        return TauSpacing(token.lower())
    except ValueError:
        pass
    try:
        if "," in token:
            return [float(part) for part in token.split(",") if part.strip()]
        return float(token)
    except ValueError as exc:
        choices = ", ".join(item.value for item in TauSpacing)
        raise ValueError(
            f"Unknown tau descriptor '{text}'. Use one of {choices}, a log base or a comma separated list"
        ) from exc


def _integer_powers(base: int, n: int) -> np.ndarray:
    values: list[int] = []
    value = 1
    while value <= n:
        values.append(value)
        value *= base
    return np.array(values, dtype=int)


def _floored_powers(base: float, n: int) -> np.ndarray:
    if n < 1:
        return np.array([], dtype=int)
    top = int(math.floor(math.log(n, base)))
    # guard against log rounding right at an exact power
    while base ** (top + 1) <= n:
        top += 1
    while top > 0 and base**top > n:
        top -= 1
    floored = np.floor(base ** np.arange(0, top + 1, dtype=float)).astype(int)
    return np.unique(floored)
