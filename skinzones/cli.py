# SPDX-License-Identifier: Apache-2.0
"""CLI entrypoints."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from skinzones.analyze.engine import analyze
from skinzones.config import load_config
from skinzones.geometry.zones import build_zones, parse_landmarks, zones_to_points
from skinzones.logging_utils import get_logger
from skinzones.schemas import ZoneReport
from skinzones.utils.io import ensure_dir, load_image, load_landmarks, save_image

LOGGER = get_logger(__name__)

app = typer.Typer(help="Attribute facial redness to forehead, cheeks, chin and nose.")


@app.command("analyze")
def analyze_cmd(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input photograph"),
    landmarks: Optional[Path] = typer.Option(None, "--landmarks", "-l", exists=True, help="68-point landmarks JSON"),
    out: Path = typer.Option(Path("runs/latest"), "--out", "-o", help="Output folder"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", exists=True, help="YAML config"),
):
    cfg = load_config(config)
    pixels = load_image(image)
    points = load_landmarks(landmarks) if landmarks else None
    result = analyze(pixels, points, cfg)

    ensure_dir(out)
    save_image(result.annotated_image, out / "annotated.png")
    report = ZoneReport.from_result(result, cfg)
    report.to_json(out / "report.json")

    typer.echo(json.dumps(report.scores))
    if report.dominant_zone:
        typer.echo(f"dominant zone: {report.dominant_zone} ({report.cause})")
    else:
        typer.echo("dominant zone: none")
    typer.echo(f"Results stored in {out}")


@app.command("zones")
def zones_cmd(
    landmarks: Path = typer.Argument(..., exists=True, dir_okay=False, help="68-point landmarks JSON"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", exists=True, help="YAML config"),
):
    cfg = load_config(config)
    points = parse_landmarks(load_landmarks(landmarks))
    if points is None:
        typer.echo("landmarks must contain exactly 68 points", err=True)
        raise typer.Exit(code=1)
    zones = build_zones(points, cfg.geometry.forehead_offset_px)
    payload = {name: [list(pt) for pt in poly] for name, poly in zones_to_points(zones).items()}
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
