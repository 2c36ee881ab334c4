# SPDX-License-Identifier: Apache-2.0
"""End-to-end analysis of one facial image."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import numpy as np

from skinzones.analyze.aggregate import ZONE_ORDER, dominant_zone, score_zones
from skinzones.config import Config
from skinzones.errors import InvalidPolygon
from skinzones.geometry.mask import ContainmentMask, rasterize
from skinzones.geometry.zones import build_zones, face_outline, parse_landmarks, polygon_from
from skinzones.logging_utils import get_logger
from skinzones.vision.blemish import blemish_filter

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    annotated_image: np.ndarray
    scores: Mapping[str, int]
    dominant_zone: Optional[str]
    flags: np.ndarray

    @property
    def height(self) -> int:
        return int(self.annotated_image.shape[0])

    @property
    def width(self) -> int:
        return int(self.annotated_image.shape[1])


def _empty_scores() -> Dict[str, int]:
    return {name: 0 for name in ZONE_ORDER}


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _face_mask(
    face_polygon: Optional[Sequence[Any]], width: int, height: int, config: Config
) -> Optional[ContainmentMask]:
    if face_polygon is None:
        return None
    try:
        return rasterize(face_polygon, width, height, config.mask.step, config.workers)
    except InvalidPolygon as exc:
        LOGGER.warning("invalid face polygon, filtering whole image", error=str(exc))
        return None


def analyze_zones(
    image: np.ndarray,
    zones: Optional[Mapping[str, Sequence[Any]]],
    face_polygon: Optional[Sequence[Any]] = None,
    config: Optional[Config] = None,
) -> AnalysisResult:
    """Run filter and aggregation for explicit zone polygons.

    ``zones=None`` means no face geometry is known: the filter runs over the
    whole image and every score stays zero.
    """
    config = config or Config()
    src = np.asarray(image)
    if src.ndim != 3:
        raise ValueError(f"expected an (H, W, 3|4) pixel buffer, got shape {src.shape}")
    height, width = src.shape[:2]
    if height == 0 or width == 0:
        face_polygon = None
        zones = None

    face = _face_mask(face_polygon, width, height, config)
    if face is None:
        LOGGER.warning("no face mask, filtering whole image")
    filtered = blemish_filter(src, face, config.filter, workers=config.workers)

    scores = _empty_scores()
    if zones is not None:
        masks = [
            (name, rasterize(polygon_from(zones[name]), width, height, config.mask.step, config.workers))
            for name in ZONE_ORDER
            if name in zones
        ]
        scores.update(score_zones(filtered.flags, masks, config.aggregate.scan_stride))
    top = dominant_zone(scores)

    LOGGER.info(
        "analysis complete",
        width=width,
        height=height,
        flagged=int(filtered.flags.sum()),
        scores=scores,
        dominant_zone=top,
    )
    return AnalysisResult(
        annotated_image=_frozen(filtered.annotated),
        scores=MappingProxyType(scores),
        dominant_zone=top,
        flags=_frozen(filtered.flags),
    )


def analyze(image: np.ndarray, landmarks: Any = None, config: Optional[Config] = None) -> AnalysisResult:
    """Analyze *image* given optional 68-point *landmarks*.

    Missing or malformed landmarks are not an error: the annotated image is
    still produced from whole-image filtering and no zone is scored.
    """
    config = config or Config()
    points = parse_landmarks(landmarks)
    if points is None:
        if landmarks is not None:
            LOGGER.warning("landmarks rejected, falling back to whole-image filtering")
        return analyze_zones(image, None, None, config)
    zones = build_zones(points, config.geometry.forehead_offset_px)
    outline = face_outline(points, config.geometry.face_outline_offset_px)
    return analyze_zones(image, zones, outline, config)
