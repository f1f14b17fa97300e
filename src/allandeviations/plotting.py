"""Plotting helpers for deviation curves."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from .pipeline import AnalysisResult
from .reporting import ESTIMATOR_TITLES


def generate_plots(result: AnalysisResult, output_dir: Path) -> Path:
    plt = _require_matplotlib()
    output_dir.mkdir(parents=True, exist_ok=True)

    panels = [name for name, dev in result.results.items() if len(dev) > 0]
    if not panels:
        raise RuntimeError("no estimator produced any tau value to plot")
    fig, axes = plt.subplots(1, len(panels), figsize=(6 * len(panels), 5), squeeze=False)

    for ax, name in zip(axes[0], panels):
        _plot_deviation(result, name, ax)

    fig.tight_layout()
    out_path = output_dir / "deviations.png"
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path


def _plot_deviation(result: AnalysisResult, name: str, ax) -> None:
    deviation = result.results[name]
    ax.errorbar(
        deviation.tau,
        deviation.deviation,
        yerr=deviation.error,
        marker="o",
        linestyle="-",
        capsize=3,
    )
    ax.set_xscale("log")
    if (deviation.deviation > 0).all():
        ax.set_yscale("log")
    ax.set_title(ESTIMATOR_TITLES.get(name, name))
    ax.set_xlabel("Tau [s]")
    ax.set_ylabel("Deviation")
    ax.grid(True, which="both", alpha=0.3)


def _require_matplotlib() -> Any:
    from pathlib import Path as _Path

    home_cache = _Path.home() / ".cache" / "fontconfig"
    try:
        home_cache.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError("matplotlib cannot write font cache in this environment") from exc

    try:
        import matplotlib
        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("matplotlib is required for plotting; install allandeviations[plot]") from exc
    except Exception as exc:  # pragma: no cover - environment issues
        raise RuntimeError(f"matplotlib initialisation failed: {exc}") from exc
    return plt
