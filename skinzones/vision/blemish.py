# SPDX-License-Identifier: Apache-2.0
"""Local-contrast redness filter.

Each pixel's redness ``R - (G + B) / 2`` is compared to the mean redness of
its neighbourhood. Spots that are redder than the surrounding skin are
flagged and tinted red in an annotated copy of the image; uniformly reddish
skin and broad lighting gradients cancel out.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Optional, Union

import numpy as np

from skinzones.config import FilterConfig
from skinzones.geometry.mask import ContainmentMask
from skinzones.logging_utils import get_logger

LOGGER = get_logger(__name__)

FaceMask = Union[ContainmentMask, np.ndarray]


class FilterResult(NamedTuple):
    annotated: np.ndarray
    flags: np.ndarray


def redness(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.float64)
    return rgb[..., 0] - (rgb[..., 1] + rgb[..., 2]) / 2.0


def _offsets(radius: int, stride: int) -> np.ndarray:
    return np.arange(-radius, radius + 1, stride)


def local_mean(values: np.ndarray, radius: int = 4, stride: int = 2) -> np.ndarray:
    """Mean of *values* over a ``(2r+1)^2`` window sampled every *stride* pixels.

    Lookups outside the image are clamped to the nearest edge pixel.
    """
    if radius == 0:
        return values.astype(np.float64)
    h, w = values.shape
    padded = np.pad(values.astype(np.float64), radius, mode="edge")
    offsets = _offsets(radius, stride)
    total = np.zeros((h, w), dtype=np.float64)
    for dy in offsets:
        rows = padded[radius + dy:radius + dy + h]
        for dx in offsets:
            total += rows[:, radius + dx:radius + dx + w]
    return total / (len(offsets) ** 2)


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def _filter_band(
    src: np.ndarray,
    red: np.ndarray,
    mean: np.ndarray,
    inside: Optional[np.ndarray],
    cfg: FilterConfig,
) -> FilterResult:
    rgb = src[..., :3].astype(np.float64)
    diff = red - mean
    brightness = rgb.sum(axis=-1) / 3.0
    flags = (
        (red > cfg.redness_min)
        & (diff > cfg.local_diff_min)
        & (brightness > cfg.brightness_min)
        & (brightness < cfg.brightness_max)
    )
    if inside is not None:
        flags &= inside

    out = src.copy()
    if flags.any():
        intensity = np.minimum(1.0, diff[flags] / cfg.intensity_scale)
        picked = rgb[flags]
        boost = _round_half_up(cfg.red_boost * intensity)
        cut = (1.0 - cfg.green_blue_cut * intensity)[:, np.newaxis]
        tinted = np.empty_like(picked)
        tinted[:, 0] = np.minimum(255.0, picked[:, 0] + boost)
        tinted[:, 1:] = np.maximum(0.0, _round_half_up(picked[:, 1:] * cut))
        out[flags, :3] = tinted.astype(np.uint8)
    return FilterResult(out, flags)


def _face_pixels(face_mask: Optional[FaceMask], width: int, height: int) -> Optional[np.ndarray]:
    if face_mask is None:
        return None
    if isinstance(face_mask, ContainmentMask):
        return face_mask.to_pixels(width, height)
    inside = np.asarray(face_mask, dtype=bool)
    if inside.shape != (height, width):
        LOGGER.warning("face mask shape mismatch, filtering whole image", shape=list(inside.shape))
        return None
    return inside


def blemish_filter(
    image: np.ndarray,
    face_mask: Optional[FaceMask] = None,
    config: Optional[FilterConfig] = None,
    workers: int = 1,
) -> FilterResult:
    """Flag and tint local redness anomalies in *image*.

    Parameters
    ----------
    image:
        ``uint8`` array of shape ``(H, W, 4)`` (RGBA) or ``(H, W, 3)``.
    face_mask:
        Optional containment predicate; pixels outside it are copied through
        unflagged. Without it the whole image is evaluated.
    workers:
        Threads used to process disjoint row bands.

    Returns
    -------
    FilterResult
        A new annotated buffer of the same shape and the boolean flag bitmap.
    """
    cfg = config or FilterConfig()
    src = np.asarray(image)
    if src.ndim != 3 or src.shape[-1] not in (3, 4):
        raise ValueError(f"expected an (H, W, 3|4) pixel buffer, got shape {src.shape}")
    h, w = src.shape[:2]
    if h == 0 or w == 0:
        return FilterResult(src.copy(), np.zeros((h, w), dtype=bool))

    inside = _face_pixels(face_mask, w, h)
    red = redness(src[..., :3])
    mean = local_mean(red, cfg.radius, cfg.sample_stride)

    if workers <= 1:
        return _filter_band(src, red, mean, inside, cfg)

    out = np.empty_like(src)
    flags = np.zeros((h, w), dtype=bool)
    size = max(1, math.ceil(h / workers))

    def _run(start: int) -> None:
        stop = min(h, start + size)
        band_inside = None if inside is None else inside[start:stop]
        res = _filter_band(src[start:stop], red[start:stop], mean[start:stop], band_inside, cfg)
        out[start:stop] = res.annotated
        flags[start:stop] = res.flags

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(_run, range(0, h, size)))
    return FilterResult(out, flags)
