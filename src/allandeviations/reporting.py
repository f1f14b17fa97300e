"""Report writers for stability analysis results."""
from __future__ import annotations

from numbers import Real
from pathlib import Path

from .pipeline import AnalysisResult
from .taus import TauSpacing

ESTIMATOR_TITLES = {
    "adev": "Allan deviation",
    "mdev": "Modified Allan deviation",
    "hdev": "Hadamard deviation",
    "tdev": "Time deviation",
    "totdev": "Total deviation",
    "mtie": "Maximum time interval error",
}


def export_results(
    result: AnalysisResult,
    output_dir: Path,
    *,
    figure_path: Path | None = None,
    input_path: Path | None = None,
) -> None:
    """Persist the deviation table and markdown report to *output_dir*."""

    output_dir.mkdir(parents=True, exist_ok=True)
    _write_deviations_csv(result, output_dir)
    _write_report_md(result, output_dir, figure_path=figure_path, input_path=input_path)


def _write_deviations_csv(result: AnalysisResult, output_dir: Path) -> None:
    result.to_frame().to_csv(output_dir / "deviations.csv", index=False)


def _describe_taus(taus) -> str:
    if isinstance(taus, str):
        return TauSpacing(taus).value
    if isinstance(taus, Real) and not isinstance(taus, bool):
        return f"log base {float(taus):g}"
    return f"{len(taus)} explicit value(s)"


def _write_report_md(
    result: AnalysisResult,
    output_dir: Path,
    *,
    figure_path: Path | None,
    input_path: Path | None,
) -> None:
    config = result.config
    lines: list[str] = []
    lines.append("# Frequency Stability Report")
    if input_path is not None:
        lines.append(f"*Input file:* `{input_path}`  ")
    lines.append(f"*Samples:* {result.samples.size}  ")
    lines.append(f"*Sample rate:* {config.rate:.6g} Hz  ")
    lines.append(f"*Input domain:* {'frequency' if config.frequency else 'phase'}  ")
    lines.append(f"*Overlapping:* {'yes' if config.overlapping else 'no'}  ")
    lines.append(f"*Taus:* {_describe_taus(config.taus)}  ")
    lines.append("")

    for name, deviation in result.results.items():
        lines.append(f"## {ESTIMATOR_TITLES.get(name, name)}")
        if len(deviation) == 0:
            lines.append("No tau value had enough supporting terms.")
            lines.append("")
            continue
        lines.append("| Tau [s] | Deviation | Error | Terms |")
        lines.append("| ---: | ---: | ---: | ---: |")
        for tau, dev, err, count in zip(*deviation):
            lines.append(f"| {tau:.6g} | {dev:.6g} | {err:.3g} | {int(count)} |")
        lines.append("")

    if figure_path is not None:
        lines.append(f"![Deviation plots]({figure_path.name})")
        lines.append("")

    lines.append("### Notes")
    lines.append("- Error is the deviation divided by the square root of the term count.")
    lines.append("- Taus supported by fewer than two terms are omitted.")
    if not config.overlapping:
        lines.append("- Non overlapping total deviation and MTIE are not suitable for publication.")

    (output_dir / "report.md").write_text("\n".join(lines), encoding="utf-8")
