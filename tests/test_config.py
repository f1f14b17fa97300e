from __future__ import annotations

from pathlib import Path

import pytest

from allandeviations.config import AnalysisConfig, load_config
from allandeviations.deviations import ESTIMATORS
from allandeviations.taus import TauSpacing


def test_defaults_without_file() -> None:
    cfg = load_config()
    assert isinstance(cfg, AnalysisConfig)
    assert cfg.rate == 1.0
    assert cfg.overlapping is True
    assert cfg.taus is TauSpacing.OCTAVE
    assert cfg.estimators == list(ESTIMATORS)


def test_load_config_overrides(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        """
        {
          "rate": 10,
          "frequency": true,
          "taus": "decade",
          "estimators": ["adev", "mtie"],
          "column": "phase"
        }
        """,
        encoding="utf-8",
    )
    cfg = load_config(cfg_path, overrides=["overlapping=false", "taus=half-octave", "rate=2.5"])
    assert cfg.rate == 2.5
    assert cfg.frequency is True
    assert cfg.overlapping is False
    assert cfg.taus is TauSpacing.HALF_OCTAVE
    assert cfg.estimators == ["adev", "mtie"]
    assert cfg.column == "phase"


@pytest.mark.parametrize(
    ("override", "expected"),
    [
        ("taus=1.5", 1.5),
        ("taus=2", 2.0),
        ("taus=1,10,100", [1.0, 10.0, 100.0]),
        ("taus=[0.5, 2]", [0.5, 2.0]),
    ],
)
def test_tau_overrides(override: str, expected) -> None:
    cfg = load_config(overrides=[override])
    assert cfg.taus == expected


def test_estimator_list_override() -> None:
    cfg = load_config(overrides=["estimators=hdev,tdev"])
    assert cfg.estimators == ["hdev", "tdev"]


@pytest.mark.parametrize(
    "override",
    ["rate=0", "rate=-1.0", "estimators=adev,bogus", "taus=weekly", "rate"],
)
def test_invalid_configuration_rejected(override: str) -> None:
    with pytest.raises(ValueError):
        load_config(overrides=[override])


def test_boolean_strings_in_json_are_parsed(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text('{"frequency": "false", "overlapping": "False", "plot": "true"}', encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.frequency is False
    assert cfg.overlapping is False
    assert cfg.plot is True


def test_non_boolean_flag_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text('{"overlapping": "sometimes"}', encoding="utf-8")
    with pytest.raises(ValueError, match="overlapping"):
        load_config(cfg_path)
