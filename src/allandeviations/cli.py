"""Command line interface for the allandeviations package."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import load_config
from .demo import run_demo
from .pipeline import run_analysis_file
from .plotting import generate_plots
from .reporting import export_results

app = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]})


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def calc(
    input_path: Path = typer.Option(..., "--in", help="Input file with phase or frequency samples.", exists=True),
    report_dir: Path = typer.Option(..., "--report", help="Output directory for reports."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON analysis configuration.", exists=True),
    rate: Optional[float] = typer.Option(None, "--rate", help="Sample rate in Hz."),
    frequency: bool = typer.Option(False, "--frequency", help="Input holds frequency instead of phase data."),
    consecutive: bool = typer.Option(False, "--consecutive", help="Use non overlapping windows."),
    taus: Optional[str] = typer.Option(
        None,
        "--taus",
        help="Tau spacing (all, decade, half-decade, octave, half-octave, quarter-octave), "
        "a custom log base, or a comma separated list of seconds.",
    ),
    estimator: Optional[List[str]] = typer.Option(
        None, "--estimator", "-e", help="Estimator to evaluate (adev, mdev, hdev, tdev, totdev, mtie)."
    ),
    column: Optional[str] = typer.Option(None, "--column", help="Column holding the samples."),
    override: Optional[List[str]] = typer.Option(None, "--set", help="Config override as key=value."),
    plot: bool = typer.Option(False, "--plot", help="Render deviation plots."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress information."),
) -> None:
    """Compute stability statistics and write a report."""

    _configure_logging(verbose)

    overrides: list[str] = []
    if rate is not None:
        overrides.append(f"rate={rate}")
    if frequency:
        overrides.append("frequency=true")
    if consecutive:
        overrides.append("overlapping=false")
    if taus is not None:
        overrides.append(f"taus={taus}")
    if estimator:
        overrides.append(f"estimators={','.join(estimator)}")
    if column is not None:
        overrides.append(f"column={column}")
    if plot:
        overrides.append("plot=true")
    overrides.extend(override or [])

    try:
        config = load_config(config_path, overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        result = run_analysis_file(input_path, config)
    except ValueError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(code=1) from exc

    figure_path = None
    if config.plot:
        try:
            figure_path = generate_plots(result, report_dir)
        except RuntimeError as exc:
            typer.echo(f"[warning] plotting skipped: {exc}")

    export_results(result, report_dir, figure_path=figure_path, input_path=input_path)

    typer.echo(f"Report written to {report_dir}")


@app.command()
def demo(
    out_dir: Path = typer.Option(Path("demo_output"), "--out", help="Target directory for demo report."),
) -> None:
    """Generate a synthetic clock series and report."""

    run_demo(out_dir)
    typer.echo(f"Demo dataset and report written to {out_dir}")


def run() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
