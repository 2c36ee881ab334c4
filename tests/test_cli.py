from __future__ import annotations

import json
from pathlib import Path

import numpy as np
from PIL import Image
from typer.testing import CliRunner

from skinzones.cli import app
from skinzones.schemas import ZoneReport

runner = CliRunner()


def _write_image(path: Path, pixels: np.ndarray) -> Path:
    Image.fromarray(pixels).save(path)
    return path


def test_analyze_with_landmarks(tmp_path, gray_face, landmarks_file):
    image = _write_image(tmp_path / "face.png", gray_face)
    out = tmp_path / "out"
    result = runner.invoke(app, ["analyze", str(image), "--landmarks", str(landmarks_file), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "dominant zone: forehead" in result.output

    report = ZoneReport.from_json(out / "report.json")
    assert report.dominant_zone == "forehead"
    assert report.cause == "Stress, Sleep, Digestion"
    assert report.sampling.scan_stride == 4
    with Image.open(out / "annotated.png") as img:
        assert img.size == (200, 200)
        assert img.mode == "RGBA"


def test_analyze_without_landmarks(tmp_path, gray_face):
    image = _write_image(tmp_path / "face.png", gray_face[..., :3].copy())
    out = tmp_path / "out"
    result = runner.invoke(app, ["analyze", str(image), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "dominant zone: none" in result.output
    data = json.loads((out / "report.json").read_text())
    assert data["scores"] == {"forehead": 0, "cheeks": 0, "chin": 0, "nose": 0}
    assert data["flagged_pixels"] == 36


def test_analyze_uses_config_file(tmp_path, gray_face, landmarks_file):
    image = _write_image(tmp_path / "face.png", gray_face)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("aggregate:\n  scan_stride: 1\nmask:\n  step: 1\n")
    out = tmp_path / "out"
    result = runner.invoke(
        app, ["analyze", str(image), "-l", str(landmarks_file), "-o", str(out), "-c", str(cfg)]
    )
    assert result.exit_code == 0, result.output
    report = ZoneReport.from_json(out / "report.json")
    assert report.scores["forehead"] == report.flagged_pixels


def test_zones_command(landmarks_file):
    result = runner.invoke(app, ["zones", str(landmarks_file)])
    assert result.exit_code == 0, result.output
    zones = json.loads(result.output)
    assert set(zones) == {"forehead", "cheeks", "chin", "nose"}
    assert zones["nose"][0] == [100.0, 85.0]


def test_zones_command_rejects_short_list(tmp_path):
    path = tmp_path / "short.json"
    path.write_text(json.dumps([[0, 0]] * 10))
    result = runner.invoke(app, ["zones", str(path)])
    assert result.exit_code == 1
