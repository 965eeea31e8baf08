"""Meter event models shared across the project.

A session is an ordered list of :class:`MeterEvent` envelopes as returned by
the OzTAM tail service.  Each envelope wraps one primary :class:`Event`
(plus optional secondary telemetry which nothing here looks at).  Field
names follow Python conventions; the camelCase wire names are kept as
aliases so payloads decode unchanged.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from oztail.core.errors import MalformedTimestamp, SessionDecodeError

# 2020-06-01T10:00:00.123Z / 2020-06-01T10:00:00.123+10:00
_ISO_FRACTIONAL = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})\.(\d+)(Z|[+-]\d{2}:\d{2})$"
)


# Plain finite numbers only: strings, booleans, NaN and infinities are rejected.
Seconds = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class EventType(str, Enum):
    LOAD = "LOAD"
    BEGIN = "BEGIN"
    AD_BEGIN = "AD_BEGIN"
    AD_COMPLETE = "AD_COMPLETE"
    PROGRESS = "PROGRESS"
    COMPLETE = "COMPLETE"


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp that carries fractional seconds.

    The zone designator is mandatory.  Fractions finer than microseconds are
    truncated.  ``datetime`` values pass through; naive ones are taken as UTC.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str):
        raise MalformedTimestamp(value)

    match = _ISO_FRACTIONAL.match(value)
    if match is None:
        raise MalformedTimestamp(value)

    base, fraction, zone = match.groups()
    fraction = (fraction + "000000")[:6]
    if zone == "Z":
        zone = "+00:00"
    try:
        return datetime.fromisoformat(f"{base}.{fraction}{zone}")
    except ValueError as exc:
        raise MalformedTimestamp(value) from exc


class Event(BaseModel):
    """One playback telemetry sample."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: EventType = Field(alias="event")
    from_position: Seconds = Field(alias="fromPosition")
    to_position: Seconds = Field(alias="toPosition")
    timestamp: datetime

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @property
    def progress_span(self) -> float:
        return self.to_position - self.from_position

    def describe(self) -> str:
        return (
            f"{self.type.value}\n"
            f"from: {self.from_position}\n"
            f"to: {self.to_position}\n"
            f"at: {self.timestamp.isoformat()}"
        )


class MeterEvent(BaseModel):
    """Reporting envelope present in a session's event stream.

    ``oztam_flags`` stays ``None`` when the field is absent from the payload.
    An empty mapping is still a present field.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    events: Tuple[Event, ...] = Field(min_length=1)
    seconds_viewed: Seconds = Field(alias="secondsViewed")
    oztam_flags: Optional[Dict[str, bool]] = Field(default=None, alias="oztamFlags")

    @property
    def primary(self) -> Event:
        return self.events[0]

    def describe(self) -> str:
        return f"{self.primary.describe()}\nprogress: {self.seconds_viewed}"


_SESSION_ADAPTER = TypeAdapter(List[MeterEvent])


def decode_session(payload: Union[str, bytes, bytearray, List[Any]]) -> List[MeterEvent]:
    """Decode a session payload (raw JSON or already-parsed list).

    Raises :class:`MalformedTimestamp` for an unparseable timestamp and
    :class:`SessionDecodeError` for any other structural problem.
    """

    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return _SESSION_ADAPTER.validate_json(payload)
        return _SESSION_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        for error in exc.errors():
            cause = error.get("ctx", {}).get("error")
            if isinstance(cause, MalformedTimestamp):
                raise cause from exc
        raise SessionDecodeError(f"Invalid session payload: {exc.error_count()} error(s)\n{exc}") from exc


def event_dump(model: BaseModel) -> Dict[str, Any]:
    """Return the JSON-ready representation of ``model`` using wire names."""

    return model.model_dump(mode="json", by_alias=True)


__all__ = [
    "EventType",
    "Event",
    "MeterEvent",
    "decode_session",
    "event_dump",
    "parse_timestamp",
]
