"""Allan-family frequency stability statistics."""

from importlib.metadata import PackageNotFoundError, version

from .conversion import frequency_to_phase
from .deviations import (
    ESTIMATORS,
    DeviationResult,
    allandev,
    hadamarddev,
    mallandev,
    mtie,
    reflect_series,
    timedev,
    totaldev,
)
from .taus import TauSpacing, parse_taus, tau_clusters

try:  # pragma: no cover - fallback when package metadata missing
    __version__ = version("allandeviations")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ESTIMATORS",
    "DeviationResult",
    "TauSpacing",
    "allandev",
    "frequency_to_phase",
    "hadamarddev",
    "mallandev",
    "mtie",
    "parse_taus",
    "reflect_series",
    "tau_clusters",
    "timedev",
    "totaldev",
]
