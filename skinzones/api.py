# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import base64
import json
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from PIL import UnidentifiedImageError

from skinzones import __version__
from skinzones.analyze.engine import analyze
from skinzones.config import load_config
from skinzones.logging_utils import get_logger
from skinzones.schemas import ZoneReport
from skinzones.utils.io import decode_image, encode_png, extract_landmarks

LOGGER = get_logger(__name__)

app = FastAPI(title="skinzones", version=__version__)


@app.get("/health")
async def health() -> dict:
    return {"ok": True, "version": __version__}


@app.post("/analyze")
async def analyze_endpoint(
    file: UploadFile = File(...),
    landmarks: Optional[str] = Form(None),
) -> dict:
    data = await file.read()
    try:
        pixels = decode_image(data)
    except (UnidentifiedImageError, OSError) as exc:
        LOGGER.warning("rejected upload", filename=file.filename, error=str(exc))
        raise HTTPException(status_code=400, detail="file is not a decodable image") from exc

    points = None
    if landmarks:
        try:
            points = extract_landmarks(json.loads(landmarks))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"bad landmarks payload: {exc}") from exc

    cfg = load_config()
    result = analyze(pixels, points, cfg)
    report = ZoneReport.from_result(result, cfg)
    return {
        "ok": True,
        "report": report.model_dump(),
        "annotated_png": base64.b64encode(encode_png(result.annotated_image)).decode("ascii"),
    }


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("skinzones.api:app", host="0.0.0.0", port=8000)
