# oztail/sdk/server.py
"""
Server shim that exposes the FastAPI app for uvicorn:
    uvicorn oztail.sdk.server:app
"""

from oztail.apps.ui_api.main import app

__all__ = ["app"]
