# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the geometry and raster layers."""

from __future__ import annotations


class SkinZonesError(Exception):
    """Base class for skinzones errors."""


class InvalidPolygon(SkinZonesError, ValueError):
    """A polygon with fewer than three points was passed to the rasterizer."""


class DimensionMismatch(SkinZonesError, ValueError):
    """Image dimensions are non-positive or disagree with a mask."""
