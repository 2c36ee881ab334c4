# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import BaseModel

from skinzones.analyze.engine import AnalysisResult
from skinzones.config import Config
from skinzones.recommendations import RECOMMENDATIONS, recommend
from skinzones.utils.io import read_json, write_json


class Sampling(BaseModel):
    mask_step: int
    scan_stride: int


class ZoneReport(BaseModel):
    width: int
    height: int
    scores: Dict[str, int]
    dominant_zone: Optional[str] = None
    cause: Optional[str] = None
    advice: Optional[str] = None
    flagged_pixels: int = 0
    sampling: Sampling

    @classmethod
    def from_result(
        cls,
        result: AnalysisResult,
        config: Config,
        table: Mapping[str, Mapping[str, str]] = RECOMMENDATIONS,
    ) -> "ZoneReport":
        rec = recommend(result.dominant_zone, table)
        return cls(
            width=result.width,
            height=result.height,
            scores=dict(result.scores),
            dominant_zone=result.dominant_zone,
            cause=rec.cause if rec else None,
            advice=rec.advice if rec else None,
            flagged_pixels=int(result.flags.sum()),
            sampling=Sampling(mask_step=config.mask.step, scan_stride=config.aggregate.scan_stride),
        )

    def to_json(self, path: Path) -> None:
        write_json(path, self.model_dump())

    @classmethod
    def from_json(cls, path: Path) -> "ZoneReport":
        return cls(**read_json(path))
