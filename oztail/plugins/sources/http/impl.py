"""Session source backed by the OzTAM tail HTTP API.

The service returns the whole session as one JSON array for
``GET /api/events/sessions?sessionId=<id>``, protected by basic auth.
Requests are made once; failures surface as :class:`SessionFetchError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from oztail.config.settings import Settings, get_settings
from oztail.core.errors import SessionFetchError
from oztail.core.events import MeterEvent, decode_session

logger = logging.getLogger(__name__)

SESSIONS_PATH = "/api/events/sessions"


class HttpSessionSource:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.settings.base_url}{SESSIONS_PATH}"

    def fetch(self, session_id: str) -> List[MeterEvent]:
        if self._client is not None:
            return self._fetch(self._client, session_id)
        with httpx.Client(timeout=self.settings.timeout) as client:
            return self._fetch(client, session_id)

    def _fetch(self, client: httpx.Client, session_id: str) -> List[MeterEvent]:
        auth = (self.settings.username, self.settings.password) if self.settings.has_credentials else None
        logger.info("Fetching session %s from %s", session_id, self.url)
        try:
            response = client.get(self.url, params={"sessionId": session_id}, auth=auth)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SessionFetchError(session_id, "unexpected response", exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            raise SessionFetchError(session_id, str(exc) or type(exc).__name__) from exc

        session = decode_session(response.content)
        logger.info("Fetched %d meter events for session %s", len(session), session_id)
        return session

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
