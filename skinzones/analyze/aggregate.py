# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from skinzones.errors import DimensionMismatch
from skinzones.geometry.mask import ContainmentMask
from skinzones.geometry.zones import ZONE_NAMES

ZONE_ORDER = ZONE_NAMES

ZoneMask = Union[ContainmentMask, np.ndarray]


def _zone_pixels(mask: ZoneMask, width: int, height: int) -> np.ndarray:
    if isinstance(mask, ContainmentMask):
        return mask.to_pixels(width, height)
    pixels = np.asarray(mask, dtype=bool)
    if pixels.shape != (height, width):
        raise DimensionMismatch(f"zone mask shape {pixels.shape} != {(height, width)}")
    return pixels


def score_zones(
    flags: np.ndarray,
    zone_masks: Sequence[Tuple[str, ZoneMask]],
    stride: int = 4,
) -> Dict[str, int]:
    """Count flagged pixels per zone, first matching zone wins.

    Only pixels on a ``stride`` grid are visited, so scores scale with
    ``1 / stride**2`` relative to an exhaustive count.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    h, w = flags.shape
    sampled = np.asarray(flags, dtype=bool)[::stride, ::stride]
    claimed = np.zeros_like(sampled)
    scores: Dict[str, int] = {}
    for name, mask in zone_masks:
        hits = _zone_pixels(mask, w, h)[::stride, ::stride] & sampled & ~claimed
        scores[name] = scores.get(name, 0) + int(hits.sum())
        claimed |= hits
    return scores


def dominant_zone(scores: Mapping[str, int], order: Iterable[str] = ZONE_ORDER) -> Optional[str]:
    """Zone with the strictly greatest score; ties go to the earlier zone."""
    names = list(order)
    names += [name for name in scores if name not in names]
    best, best_score = None, 0
    for name in names:
        score = scores.get(name, 0)
        if score > best_score:
            best, best_score = name, score
    return best
