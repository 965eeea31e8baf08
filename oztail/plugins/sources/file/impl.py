from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from oztail.config.settings import Settings, get_settings
from oztail.core.errors import SessionFetchError
from oztail.core.events import MeterEvent, decode_session

logger = logging.getLogger(__name__)


class JsonFileSessionSource:
    """Read a dumped session (``<root>/<session_id>.json``) from disk.

    ``path`` pins a single file regardless of the requested session id.
    """

    def __init__(self, root: Optional[Path] = None, path: Optional[Path] = None,
                 settings: Optional[Settings] = None):
        self.root = Path(root) if root is not None else (settings or get_settings()).sessions_root
        self.path = Path(path) if path is not None else None

    def path_for(self, session_id: str) -> Path:
        return self.path or self.root / f"{session_id}.json"

    def fetch(self, session_id: str) -> List[MeterEvent]:
        p = self.path_for(session_id)
        logger.info("Reading session %s from %s", session_id, p)
        try:
            raw = p.read_bytes()
        except OSError as exc:
            raise SessionFetchError(session_id, f"cannot read {p}: {exc.strerror or exc}") from exc
        return decode_session(raw)

    def close(self) -> None:
        pass
