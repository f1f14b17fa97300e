"""Allan-family deviations and maximum time interval error.

Every estimator accepts phase data (or frequency data with
``frequency=True``), a sample rate in Hz, an ``overlapping`` flag and a tau
descriptor, and returns a :class:`DeviationResult`. Taus are evaluated in
increasing order and the sweep stops at the first tau supported by fewer
than two terms.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .conversion import frequency_to_phase
from .taus import TauDescriptor, TauSpacing, tau_clusters

logger = logging.getLogger(__name__)

Kernel = Callable[[int, int], Tuple[float, int]]


@dataclass(frozen=True)
class DeviationResult:
    """Index-aligned taus (seconds), deviations, errors and term counts."""

    tau: np.ndarray
    deviation: np.ndarray
    error: np.ndarray
    count: np.ndarray

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.tau, self.deviation, self.error, self.count))

    def __len__(self) -> int:
        return int(self.tau.size)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "tau": self.tau,
                "deviation": self.deviation,
                "error": self.error,
                "count": self.count,
            }
        )


def _prepare(data, rate: float, frequency: bool, name: str, minimum: int) -> np.ndarray:
    if rate <= 0:
        raise ValueError(f"rate for {name} must be positive, got {rate}")
    series = np.asarray(data, dtype=float)
    if series.ndim != 1:
        raise ValueError(f"data for {name} must be a 1-D series")
    if frequency:
        series = frequency_to_phase(series, rate)
    if series.size < minimum:
        raise ValueError(f"Length of data for {name} must be at least {minimum}, got {series.size}")
    return series


def _sweep(m: np.ndarray, rate: float, overlapping: bool, kernel: Kernel) -> DeviationResult:
    """Run *kernel* for every cluster size until one is under-supported."""

    dev = np.zeros(m.size, dtype=float)
    deverr = np.zeros(m.size, dtype=float)
    devcount = np.zeros(m.size, dtype=int)

    for index, tau in enumerate(m):
        tau = int(tau)
        stride = 1 if overlapping else tau
        value, terms = kernel(tau, stride)
        if terms <= 1:
            logger.debug("Stopping at m=%d: %d supporting term(s)", tau, terms)
            break
        dev[index] = value
        deverr[index] = value / math.sqrt(terms)
        devcount[index] = terms

    return _select_supported(m, rate, dev, deverr, devcount)


def _select_supported(
    m: np.ndarray, rate: float, dev: np.ndarray, deverr: np.ndarray, devcount: np.ndarray
) -> DeviationResult:
    selector = devcount > 1
    return DeviationResult(
        tau=m[selector] / rate,
        deviation=dev[selector],
        error=deverr[selector],
        count=devcount[selector],
    )


def _advise_overlapping(name: str, overlapping: bool) -> None:
    if not overlapping:
        logger.warning(
            "It is highly unusual to use %s in the non overlapping form. "
            "Do not use this for definite interpretation or publication.",
            name,
        )


def allandev(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the (overlapping) Allan deviation.

    Parameters
    ----------
    data:
        Phase samples, or frequency samples when *frequency* is true.
    rate:
        Sample rate in Hz.
    frequency:
        Integrate *data* into phase before evaluating.
    overlapping:
        Stride of one sample when true, of one cluster otherwise.
    taus:
        Tau descriptor, see :func:`allandeviations.taus.tau_clusters`.
    """

    x = _prepare(data, rate, frequency, "allandev", 3)
    n = x.size

    def kernel(tau: int, stride: int) -> Tuple[float, int]:
        terms = len(range(0, n - 2 * tau, stride))
        if terms <= 1:
            return 0.0, terms
        v = x[: n - 2 * tau : stride] - 2 * x[tau : n - tau : stride] + x[2 * tau :: stride]
        total = float(np.dot(v, v))
        return math.sqrt(total / (2 * terms)) / tau * rate, terms

    return _sweep(tau_clusters(taus, rate, n), rate, overlapping, kernel)


def mallandev(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the modified Allan deviation.

    The windowed sum of second differences is seeded over the first cluster
    and then carried forward by adding one third difference per step, so
    each term costs O(1) instead of O(m).
    """

    x = _prepare(data, rate, frequency, "mallandev", 4)
    n = x.size

    def kernel(tau: int, stride: int) -> Tuple[float, int]:
        steps = np.arange(0, max(n - 3 * tau, 0), stride)
        terms = 1 + steps.size
        if terms <= 1:
            return 0.0, terms
        seed = np.arange(0, max(min(tau, n - 2 * tau), 0), stride)
        v0 = float(np.sum(x[seed] - 2 * x[seed + tau] + x[seed + 2 * tau]))
        increments = x[steps + 3 * tau] - 3 * x[steps + 2 * tau] + 3 * x[steps + tau] - x[steps]
        # running[k] = running[k - 1] + increments[k - 1]
        running = np.cumsum(np.concatenate(([v0], increments)))
        total = float(np.dot(running, running))
        return math.sqrt(total / (2 * terms)) / (tau * tau) * rate, terms

    return _sweep(tau_clusters(taus, rate, n), rate, overlapping, kernel)


def hadamarddev(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the Hadamard deviation from third differences of phase."""

    x = _prepare(data, rate, frequency, "hadamarddev", 5)
    n = x.size

    def kernel(tau: int, stride: int) -> Tuple[float, int]:
        terms = len(range(0, n - 3 * tau, stride))
        if terms <= 1:
            return 0.0, terms
        v = (
            x[3 * tau :: stride]
            - 3 * x[2 * tau : n - tau : stride]
            + 3 * x[tau : n - 2 * tau : stride]
            - x[: n - 3 * tau : stride]
        )
        total = float(np.dot(v, v))
        return math.sqrt(total / (6 * terms)) / tau * rate, terms

    return _sweep(tau_clusters(taus, rate, n), rate, overlapping, kernel)


def timedev(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the time deviation, ``tau / sqrt(3)`` times the modified Allan deviation."""

    x = _prepare(data, rate, frequency, "timedev", 4)
    modified = mallandev(x, rate, overlapping=overlapping, taus=taus)
    scale = modified.tau / math.sqrt(3)
    return DeviationResult(
        tau=modified.tau,
        deviation=scale * modified.deviation,
        error=scale * modified.error,
        count=modified.count,
    )


def reflect_series(data: Sequence[float] | np.ndarray) -> np.ndarray:
    """Extend *data* by point reflection about both endpoints.

    The result has ``3n - 4`` samples: ``n - 2`` reflected samples on the
    left, the original series, and ``n - 2`` reflected samples on the right.
    """

    x = np.asarray(data, dtype=float)
    if x.size < 3:
        raise ValueError("Reflection requires at least 3 samples")
    inner = x[-2:0:-1]
    left = 2 * x[0] - inner
    right = 2 * x[-1] - inner
    return np.concatenate((left, x, right))


def totaldev(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the total deviation.

    Second differences are centred on every interior sample of the original
    series and reach into the reflected extension when the cluster is wider
    than the distance to an endpoint.
    """

    x = _prepare(data, rate, frequency, "totaldev", 3)
    n = x.size
    _advise_overlapping("totaldev", overlapping)

    extended = reflect_series(x)

    def kernel(tau: int, stride: int) -> Tuple[float, int]:
        if n - tau < 1:
            return 0.0, 0
        centres = np.arange(n - 1, 2 * n - 3, stride)
        terms = centres.size
        if terms <= 1:
            return 0.0, terms
        v = extended[centres - tau] - 2 * extended[centres] + extended[centres + tau]
        total = float(np.dot(v, v))
        return math.sqrt(total / (2 * terms)) / tau * rate, terms

    return _sweep(tau_clusters(taus, rate, n), rate, overlapping, kernel)


class _RunningExtrema:
    """Maximum and minimum of ``values[start : start + span + 1]``.

    Sliding only looks at the incoming samples, unless an outgoing sample
    held the current extremum, in which case the new window is rescanned.
    """

    def __init__(self, values: List[float], span: int):
        self.values = values
        self.span = span
        self.start = 0
        window = values[: span + 1]
        self.high = max(window)
        self.low = min(window)

    @property
    def spread(self) -> float:
        return self.high - self.low

    def slide(self, stride: int) -> float:
        values = self.values
        old_end = self.start + self.span + 1
        start = self.start + stride
        end = start + self.span + 1
        outgoing = values[self.start : min(start, old_end)]
        incoming = values[max(start, old_end) : end]

        if self.high in outgoing:
            self.high = max(values[start:end])
        elif incoming:
            self.high = max(self.high, max(incoming))

        if self.low in outgoing:
            self.low = min(values[start:end])
        elif incoming:
            self.low = min(self.low, min(incoming))

        self.start = start
        return self.spread


def mtie(
    data: Sequence[float] | np.ndarray,
    rate: float,
    *,
    frequency: bool = False,
    overlapping: bool = True,
    taus: TauDescriptor = TauSpacing.OCTAVE,
) -> DeviationResult:
    """Compute the maximum time interval error.

    For each cluster size ``m`` this is the largest peak-to-peak excursion
    of any window of ``m + 1`` consecutive phase samples. The term count is
    ``n - m``.
    """

    x = _prepare(data, rate, frequency, "mtie", 2)
    n = x.size
    _advise_overlapping("mtie", overlapping)

    values = x.tolist()

    def kernel(tau: int, stride: int) -> Tuple[float, int]:
        terms = n - tau
        if terms < 2:
            return 0.0, terms
        window = _RunningExtrema(values, tau)
        worst = window.spread
        for _ in range(stride, n - tau, stride):
            spread = window.slide(stride)
            if spread > worst:
                worst = spread
        return worst, terms

    return _sweep(tau_clusters(taus, rate, n), rate, overlapping, kernel)


ESTIMATORS: Dict[str, Callable[..., DeviationResult]] = {
    "adev": allandev,
    "mdev": mallandev,
    "hdev": hadamarddev,
    "tdev": timedev,
    "totdev": totaldev,
    "mtie": mtie,
}
