from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .deviations import ESTIMATORS
from .taus import TauDescriptor, TauSpacing, parse_taus


@dataclass
class AnalysisConfig:
    rate: float = 1.0
    frequency: bool = False
    overlapping: bool = True
    taus: TauDescriptor = TauSpacing.OCTAVE
    estimators: List[str] = field(default_factory=lambda: list(ESTIMATORS))
    column: Optional[str] = None
    plot: bool = False

    def validate(self) -> "AnalysisConfig":
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")
        unknown = [name for name in self.estimators if name not in ESTIMATORS]
        if unknown:
            raise ValueError(f"Unknown estimator(s) {unknown}. Expected any of {list(ESTIMATORS)}")
        if not self.estimators:
            raise ValueError("At least one estimator must be selected")
        return self


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {**base}
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge(base[key], value)  # type: ignore[index]
        else:
            merged[key] = value
    return merged


def load_config(path: Path | str | None = None, overrides: Sequence[str] | None = None) -> AnalysisConfig:
    """
    Load an analysis configuration from JSON and apply CLI-style overrides.

    Overrides are expressed as `key=value` pairs, e.g.:
        ["rate=10", "taus=decade", "overlapping=false"]
    Without *path* the defaults are used as the base.
    """
    data = _load_json(Path(path)) if path is not None else {}
    override_data: Dict[str, Any] = {}
    for override in overrides or []:
        key, raw_value = _parse_override(override)
        _assign_nested(override_data, key, raw_value)
    merged = _merge(data, override_data)

    estimators = merged.get("estimators")
    if isinstance(estimators, str):
        estimators = [part.strip() for part in estimators.split(",") if part.strip()]
    return AnalysisConfig(
        rate=float(merged.get("rate", 1.0)),
        frequency=_coerce_bool(merged.get("frequency", False), "frequency"),
        overlapping=_coerce_bool(merged.get("overlapping", True), "overlapping"),
        taus=_coerce_taus(merged.get("taus", TauSpacing.OCTAVE.value)),
        estimators=list(estimators) if estimators else list(ESTIMATORS),
        column=str(merged["column"]) if merged.get("column") is not None else None,
        plot=_coerce_bool(merged.get("plot", False), "plot"),
    ).validate()


def _coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, str):
        value = _coerce_value(value.strip())
    if not isinstance(value, (bool, int)):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return bool(value)


def _coerce_taus(value: Any) -> TauDescriptor:
    if isinstance(value, str):
        return parse_taus(value)
    if isinstance(value, list):
        return [float(item) for item in value]
    if isinstance(value, bool):
        raise ValueError("taus may not be a boolean")
    return float(value)


def _parse_override(item: str) -> tuple[str, Any]:
    if "=" not in item:
        raise ValueError(f"Override '{item}' must use key=value syntax")
    key, raw_value = item.split("=", 1)
    key = key.strip()
    if not key:
        raise ValueError("Override key may not be empty")
    value = _coerce_value(raw_value.strip())
    return key, value


def _coerce_value(raw: str) -> Any:
    if raw.lower() in {"true", "false"}:
        return raw.lower() == "true"
    try:
        if "." in raw or "e" in raw.lower():
            return float(raw)
        return int(raw)
    except ValueError:
        pass
    if raw.startswith("[") and raw.endswith("]"):
        return json.loads(raw)
    if raw.startswith("{") and raw.endswith("}"):
        return json.loads(raw)
    return raw


def _assign_nested(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    cursor = target
    parts = dotted_key.split(".")
    for part in parts[:-1]:
        cursor = cursor.setdefault(part, {})
    cursor[parts[-1]] = value
