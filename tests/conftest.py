from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest


def _synthetic_landmarks() -> np.ndarray:
    """68 points of a frontal face centred in a 200x200 image."""
    pts = np.zeros((68, 2), dtype=float)
    theta = np.pi * np.arange(17) / 16
    pts[0:17, 0] = 100 - 60 * np.cos(theta)
    pts[0:17, 1] = 100 + 70 * np.sin(theta)
    pts[17:22] = np.c_[np.linspace(55, 90, 5), np.full(5, 80.0)]
    pts[22:27] = np.c_[np.linspace(110, 145, 5), np.full(5, 80.0)]
    pts[27:31] = np.c_[np.full(4, 100.0), [85, 95, 105, 115]]
    pts[31:36] = np.c_[[88, 94, 100, 106, 112], np.full(5, 120.0)]
    eye = np.linspace(0, 2 * np.pi, 6, endpoint=False)
    pts[36:42] = np.c_[70 + 8 * np.cos(eye), 90 + 3 * np.sin(eye)]
    pts[42:48] = np.c_[130 + 8 * np.cos(eye), 90 + 3 * np.sin(eye)]
    # outer lip, 48 and 54 are the corners, 57 the bottom centre
    outer = np.pi + 2 * np.pi * np.arange(12) / 12
    pts[48:60] = np.c_[100 + 20 * np.cos(outer), 140 + 10 * np.sin(outer)]
    inner = np.pi + 2 * np.pi * np.arange(8) / 8
    pts[60:68] = np.c_[100 + 12 * np.cos(inner), 140 + 4 * np.sin(inner)]
    return pts


@pytest.fixture
def landmarks() -> np.ndarray:
    return _synthetic_landmarks()


@pytest.fixture
def landmarks_file(tmp_path: Path, landmarks: np.ndarray) -> Path:
    path = tmp_path / "landmarks.json"
    path.write_text(json.dumps({"positions": [{"x": x, "y": y} for x, y in landmarks.tolist()]}))
    return path


def flat_image(width: int, height: int, rgb=(128, 128, 128)) -> np.ndarray:
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[..., :3] = rgb
    img[..., 3] = 255
    return img


@pytest.fixture
def gray_face() -> np.ndarray:
    """200x200 mid-gray image with a reddish 6x6 spot on the forehead."""
    img = flat_image(200, 200)
    img[45:51, 97:103, 0] = 168
    return img
