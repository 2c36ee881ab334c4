from __future__ import annotations

import pytest
from pydantic import ValidationError

from skinzones.config import Config, FilterConfig, load_config
from skinzones.recommendations import RECOMMENDATIONS, recommend


def test_defaults_match_reference_design():
    cfg = Config()
    assert cfg.mask.step == 2
    assert cfg.aggregate.scan_stride == 4
    assert cfg.filter.radius == 4
    assert cfg.geometry.forehead_offset_px == 60.0


def test_yaml_and_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("filter:\n  redness_min: 20\ngeometry:\n  forehead_offset_px: 45\n")
    monkeypatch.setenv("SKINZONES_MASK_STEP", "1")
    monkeypatch.setenv("SKINZONES_WORKERS", "3")
    cfg = load_config(path)
    assert cfg.filter.redness_min == 20
    assert cfg.geometry.forehead_offset_px == 45
    assert cfg.mask.step == 1
    assert cfg.workers == 3


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    for var in ("SKINZONES_MASK_STEP", "SKINZONES_SCAN_STRIDE", "SKINZONES_FILTER_RADIUS", "SKINZONES_WORKERS"):
        monkeypatch.delenv(var, raising=False)
    assert load_config(tmp_path / "absent.yaml") == Config()


def test_recommend_lookup():
    assert recommend("chin").cause == "Hormonal Imbalance"
    assert recommend(None) is None
    assert recommend("ears") is None
    custom = {"nose": {"cause": "c", "advice": "a"}}
    assert recommend("nose", custom).advice == "a"
    assert set(RECOMMENDATIONS) == {"forehead", "cheeks", "chin", "nose"}


def test_scan_stride_and_radius_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SKINZONES_SCAN_STRIDE", "1")
    monkeypatch.setenv("SKINZONES_FILTER_RADIUS", "2")
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.aggregate.scan_stride == 1
    assert cfg.filter.radius == 2


@pytest.mark.parametrize(
    "yaml_text",
    [
        "mask:\n  step: 0\n",
        "filter:\n  sample_stride: 0\n",
        "filter:\n  radius: -1\n",
        "aggregate:\n  scan_stride: 0\n",
        "workers: 0\n",
    ],
)
def test_yaml_rejects_non_positive_strides(tmp_path, yaml_text):
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml_text)
    with pytest.raises(ValidationError):
        load_config(path)


@pytest.mark.parametrize(
    "var", ["SKINZONES_MASK_STEP", "SKINZONES_SCAN_STRIDE", "SKINZONES_WORKERS"]
)
def test_env_rejects_zero(tmp_path, monkeypatch, var):
    monkeypatch.setenv(var, "0")
    with pytest.raises(ValidationError):
        load_config(tmp_path / "absent.yaml")


def test_filter_config_rejects_zero_sample_stride():
    with pytest.raises(ValidationError):
        FilterConfig(sample_stride=0)
