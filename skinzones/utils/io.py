# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
from PIL import Image


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_json(path: Path) -> Any:
    return json.loads(path.read_text())


def write_json(path: Path, data: Dict[str, Any]) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(data, indent=2))


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes to an RGBA ``uint8`` array."""
    with Image.open(io.BytesIO(data)) as img:
        return np.asarray(img.convert("RGBA")).copy()


def load_image(path: Path) -> np.ndarray:
    return decode_image(Path(path).read_bytes())


def encode_png(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels)).save(buf, format="PNG")
    return buf.getvalue()


def save_image(pixels: np.ndarray, path: Path) -> None:
    ensure_dir(path.parent)
    path.write_bytes(encode_png(pixels))


def extract_landmarks(data: Any) -> List[Any]:
    """Pull the point list out of a landmarks document.

    Accepts a bare list or an object with a ``landmarks`` or ``positions`` key.
    """
    if isinstance(data, dict):
        for key in ("landmarks", "positions"):
            if key in data:
                return data[key]
        raise ValueError("landmarks document has no 'landmarks' or 'positions' key")
    if not isinstance(data, list):
        raise ValueError(f"unsupported landmarks document type: {type(data).__name__}")
    return data


def load_landmarks(path: Path) -> List[Any]:
    return extract_landmarks(read_json(path))
