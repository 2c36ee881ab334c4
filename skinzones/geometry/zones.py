# SPDX-License-Identifier: Apache-2.0
"""Facial zone polygons derived from the 68-point landmark layout.

Index convention: 0-16 jaw, 17-21 left brow, 22-26 right brow, 27-35 nose,
36-41 left eye, 42-47 right eye, 48-67 mouth.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, NamedTuple, Optional, Sequence

import numpy as np

from skinzones.errors import InvalidPolygon
from skinzones.logging_utils import get_logger

LOGGER = get_logger(__name__)

N_LANDMARKS = 68
JAW = list(range(0, 17))
BROWS = list(range(17, 27))
ZONE_NAMES = ("forehead", "cheeks", "chin", "nose")

CHEEK_INDICES = [0, 3, 31, 48, 13, 16, 54, 35]
CHIN_INDICES = [5, 11, 57]
NOSE_INDICES = [27, 31, 35]


class Point(NamedTuple):
    x: float
    y: float


def _as_pair(item: Any) -> tuple[float, float]:
    if isinstance(item, Mapping):
        return float(item["x"]), float(item["y"])
    x, y = item
    return float(x), float(y)


def parse_landmarks(raw: Any) -> Optional[np.ndarray]:
    """Normalize *raw* to a ``(68, 2)`` float array.

    Anything that is not exactly 68 finite points is treated as absent and
    yields ``None``.
    """
    if raw is None:
        return None
    try:
        if isinstance(raw, np.ndarray):
            pts = raw.astype(float)
        else:
            pts = np.array([_as_pair(item) for item in raw], dtype=float)
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.warning("landmarks unreadable", error=str(exc))
        return None
    if pts.shape != (N_LANDMARKS, 2):
        LOGGER.warning("landmarks malformed", shape=list(pts.shape))
        return None
    if not np.isfinite(pts).all():
        LOGGER.warning("landmarks contain non-finite values")
        return None
    return pts


def _lifted(point: np.ndarray, offset: float) -> np.ndarray:
    return np.array([point[0], point[1] - offset])


def build_zones(landmarks: np.ndarray, forehead_offset: float = 60.0) -> Dict[str, np.ndarray]:
    """Return the four zone polygons keyed in scoring priority order.

    The forehead has no landmarks of its own, so the outer brow points are
    lifted by *forehead_offset* pixels to stand in for the hairline. The
    cheek hull is coarse and may straddle the nose.
    """
    p = np.asarray(landmarks, dtype=float)
    forehead = np.stack([
        p[17], p[21], p[22], p[26],
        _lifted(p[26], forehead_offset),
        _lifted(p[17], forehead_offset),
    ])
    return {
        "forehead": forehead,
        "cheeks": p[CHEEK_INDICES].copy(),
        "chin": p[CHIN_INDICES].copy(),
        "nose": p[NOSE_INDICES].copy(),
    }


def face_outline(landmarks: np.ndarray, brow_offset: float = 50.0) -> np.ndarray:
    """Jawline followed by the brows (right to left) lifted by *brow_offset*."""
    p = np.asarray(landmarks, dtype=float)
    brow_top = p[BROWS[::-1]] - np.array([0.0, brow_offset])
    return np.concatenate([p[JAW], brow_top])


def zones_to_points(zones: Mapping[str, np.ndarray]) -> Dict[str, list[Point]]:
    return {name: [Point(float(x), float(y)) for x, y in poly] for name, poly in zones.items()}


def polygon_from(points: Sequence[Any]) -> np.ndarray:
    """Coerce a sequence of points or pairs to an ``(N, 2)`` float array."""
    if isinstance(points, np.ndarray):
        pts = points.astype(float)
    else:
        pts = np.array([_as_pair(pt) for pt in points], dtype=float)
    if pts.size == 0:
        return pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise InvalidPolygon(f"expected (N, 2) points, got shape {pts.shape}")
    return pts
