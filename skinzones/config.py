# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class GeometryConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # both offsets assume a typical face size in the source image
    forehead_offset_px: float = 60.0
    face_outline_offset_px: float = 50.0


class MaskConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    step: int = Field(2, ge=1)


class FilterConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    radius: int = Field(4, ge=0)
    sample_stride: int = Field(2, ge=1)
    redness_min: float = 15.0
    local_diff_min: float = 5.0
    brightness_min: float = 50.0
    brightness_max: float = 240.0
    intensity_scale: float = Field(30.0, gt=0)
    red_boost: float = 140.0
    green_blue_cut: float = 0.6


class AggregateConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    scan_stride: int = Field(4, ge=1)


class Config(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    geometry: GeometryConfig = GeometryConfig()
    mask: MaskConfig = MaskConfig()
    filter: FilterConfig = FilterConfig()
    aggregate: AggregateConfig = AggregateConfig()
    workers: int = Field(1, ge=1)


_ENV_OVERRIDES = {
    "SKINZONES_MASK_STEP": ("mask", "step"),
    "SKINZONES_SCAN_STRIDE": ("aggregate", "scan_stride"),
    "SKINZONES_FILTER_RADIUS": ("filter", "radius"),
}


def load_config(path: Path | None = None) -> Config:
    load_dotenv()
    path = path or Path(__file__).with_name("config.yaml")
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
        cfg = Config(**data)
    else:
        cfg = Config()

    # environment overrides
    for var, (section, field) in _ENV_OVERRIDES.items():
        value = os.getenv(var)
        if value:
            setattr(getattr(cfg, section), field, int(value))
    workers = os.getenv("SKINZONES_WORKERS")
    if workers:
        cfg.workers = int(workers)
    return cfg
