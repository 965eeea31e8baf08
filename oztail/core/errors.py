"""Exception hierarchy for session retrieval and decoding.

Validation problems are never raised; they are returned as
:mod:`oztail.core.violations` values.  The exceptions here only cover input
that cannot be turned into meter events in the first place.
"""

from __future__ import annotations

from typing import Optional


class OztailError(Exception):
    """Base class for every error raised by the package."""


class SessionDecodeError(OztailError):
    """The session payload is not a valid list of meter events."""


class MalformedTimestamp(SessionDecodeError, ValueError):
    """A timestamp string is not ISO-8601 with fractional seconds."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed timestamp: {value!r}")
        self.value = value


class SessionFetchError(OztailError):
    """Retrieving a session from its source failed."""

    def __init__(self, session_id: str, reason: str, status_code: Optional[int] = None) -> None:
        detail = f"Failed to fetch session {session_id}: {reason}"
        if status_code is not None:
            detail = f"{detail} (HTTP {status_code})"
        super().__init__(detail)
        self.session_id = session_id
        self.status_code = status_code


__all__ = ["OztailError", "SessionDecodeError", "MalformedTimestamp", "SessionFetchError"]
