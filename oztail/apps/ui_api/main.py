from __future__ import annotations
from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, List

from oztail.core.errors import SessionDecodeError, SessionFetchError
from oztail.core.events import decode_session
from oztail.sdk import REGISTRY, SDK_CONFIG, ValidationSession, check_events, create_source

app = FastAPI(title="OzTAM Session Validator API")


@app.exception_handler(SessionDecodeError)
async def decode_error(request: Request, exc: SessionDecodeError):
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(SessionFetchError)
async def fetch_error(request: Request, exc: SessionFetchError):
    return JSONResponse(
        status_code=502,
        content={"error": str(exc), "session_id": exc.session_id, "upstream_status": exc.status_code},
    )


@app.get("/sources")
def list_sources():
    return {"default": SDK_CONFIG.default_source, "sources": REGISTRY.keys()}


@app.post("/validate")
def validate_inline(payload: List[Any] = Body(...)):
    events = decode_session(payload)
    return check_events(events).to_dict()


@app.get("/sessions/{session_id}/report")
def session_report(session_id: str, source: str = SDK_CONFIG.default_source):
    key = SDK_CONFIG.source_key(source)
    if key not in REGISTRY.keys():
        raise HTTPException(status_code=400, detail=f"unknown source {source!r}")
    session = ValidationSession(session_id, create_source(key))
    try:
        return session.run().to_dict()
    finally:
        session.close()
