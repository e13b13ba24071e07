# design_rules/main.py
import logging
import os
from typing import Annotated, List, Union

from fastapi import FastAPI, File, HTTPException, Response, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import config
from .analyzers import analyze_image_bytes
from .models import DEFAULT_BORDER_RADIUS, DEFAULT_SPACING, DesignElements
from .rules import generate_cursor_rule
from .session import AnalysisSession

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("design-rules")

app = FastAPI(title="Design Rule Engine")
session = AnalysisSession()

Number = Union[int, float]
HexColor = Annotated[str, Field(pattern=r"^#[0-9a-fA-F]{6}$")]


class TypographyPayload(BaseModel):
    fontFamily: List[str] = []
    fontSizes: List[Number] = []
    fontWeights: List[int] = []


class DesignElementsPayload(BaseModel):
    colors: List[HexColor] = []
    typography: TypographyPayload = TypographyPayload()
    spacing: List[Number] = list(DEFAULT_SPACING)
    borderRadius: List[Number] = list(DEFAULT_BORDER_RADIUS)
    components: List[str] = []


def _check_upload(file: UploadFile):
    ext = os.path.splitext(file.filename or "")[1].lower()
    if ext not in config.ACCEPTED_EXTENSIONS:
        raise HTTPException(
            status_code=415,
            detail=f"unsupported file type {ext or '(none)'}; expected one of {', '.join(config.ACCEPTED_EXTENSIONS)}",
        )


async def _analyze_upload(file: UploadFile):
    """
    Run one upload through the session: begin -> analyze + render -> complete.
    Raises 409 when a newer upload took over while this one was running.
    """
    _check_upload(file)
    request_id = session.begin()
    finished = False
    try:
        content = await file.read()
        elements = await analyze_image_bytes(content)
        rule = generate_cursor_rule(elements)
        finished = True
    except Exception as e:
        logger.exception("analysis %s failed", request_id)
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        # covers cancellation too; no-op if a newer upload already took over
        if not finished:
            session.fail(request_id)

    if not session.complete(request_id, elements, rule):
        raise HTTPException(status_code=409, detail="superseded by a newer upload")
    logger.info("analysis %s complete (%s, %d colors)", request_id, file.filename, len(elements.colors))
    return request_id, elements, rule


@app.post("/api/analyze")
async def analyze(file: UploadFile = File(...)):
    request_id, elements, _ = await _analyze_upload(file)
    return JSONResponse(content={"status": "ok", "request_id": request_id, "designElements": elements.to_dict()})


@app.post("/api/design-rule")
async def design_rule(file: UploadFile = File(...)):
    request_id, elements, rule = await _analyze_upload(file)
    return JSONResponse(content={
        "status": "ok",
        "request_id": request_id,
        "designElements": elements.to_dict(),
        "rule": rule,
    })


@app.post("/api/design-rule/download")
async def download_design_rule(file: UploadFile = File(...)):
    """
    Same as /api/design-rule but returns the Markdown document as a file attachment.
    """
    _, _, rule = await _analyze_upload(file)
    headers = {"Content-Disposition": f'attachment; filename="{config.RULE_FILENAME}"'}
    return Response(content=rule, media_type="text/markdown", headers=headers)


@app.post("/api/render")
async def render(payload: DesignElementsPayload):
    """
    Render a (possibly hand-edited) DesignElements record without touching the session.
    """
    try:
        elements = DesignElements.from_dict(payload.model_dump())
        rule = generate_cursor_rule(elements)
    except Exception as e:
        return JSONResponse(content={"status": "error", "message": str(e)}, status_code=500)
    return Response(content=rule, media_type="text/markdown")


@app.get("/api/session")
async def get_session():
    return JSONResponse(content={"status": "ok", "session": session.snapshot().to_dict()})


@app.delete("/api/session")
async def reset_session():
    session.reset()
    return JSONResponse(content={"status": "ok", "session": session.snapshot().to_dict()})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
