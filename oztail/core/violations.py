"""Violation values produced by the sequence validator.

Every variant is an immutable pydantic model tagged with ``kind`` and grouped
by ``category`` so that reporting layers can bucket them without
``isinstance`` ladders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Literal

from pydantic import BaseModel, ConfigDict

from oztail.core.events import Event, event_dump

CARDINALITY = "cardinality"
SEQUENCE = "sequence"
PROGRESS = "progress"
AD = "ad"

CATEGORIES = (CARDINALITY, SEQUENCE, PROGRESS, AD)


class Violation(BaseModel, ABC):
    """Base class for a single failed check."""

    model_config = ConfigDict(frozen=True)

    category: ClassVar[str] = ""

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable diagnostic for this violation."""

    def to_dict(self) -> Dict[str, Any]:
        payload = event_dump(self)
        payload["category"] = self.category
        payload["message"] = self.message
        return payload


# ---------------------------------------------------------------------------
# Cardinality
# ---------------------------------------------------------------------------


class NoEvents(Violation):
    kind: Literal["NoEvents"] = "NoEvents"
    category: ClassVar[str] = CARDINALITY

    @property
    def message(self) -> str:
        return "No oztail events"


class NoLoad(Violation):
    kind: Literal["NoLoad"] = "NoLoad"
    category: ClassVar[str] = CARDINALITY

    @property
    def message(self) -> str:
        return "No load event"


class MultipleLoad(Violation):
    kind: Literal["MultipleLoad"] = "MultipleLoad"
    category: ClassVar[str] = CARDINALITY
    count: int

    @property
    def message(self) -> str:
        return f"There must only be one load event per session, found {self.count}"


class NoBegin(Violation):
    kind: Literal["NoBegin"] = "NoBegin"
    category: ClassVar[str] = CARDINALITY

    @property
    def message(self) -> str:
        return "No begin event"


class MultipleBegin(Violation):
    kind: Literal["MultipleBegin"] = "MultipleBegin"
    category: ClassVar[str] = CARDINALITY
    count: int

    @property
    def message(self) -> str:
        return f"There must only be one begin event per session, found {self.count}"


# ---------------------------------------------------------------------------
# Per-event span checks
# ---------------------------------------------------------------------------


class ProgressTooLong(Violation):
    kind: Literal["ProgressTooLong"] = "ProgressTooLong"
    category: ClassVar[str] = PROGRESS
    event: Event
    span: float

    @property
    def message(self) -> str:
        # The 60 second limit is enforced upstream; it is flagged via oztamFlags.
        return (
            f"Progress event must be 60 seconds or less, time was {self.span} "
            f"for {self.event.type.value} event at {self.event.timestamp.isoformat()}"
        )


class NegativeProgress(Violation):
    kind: Literal["NegativeProgress"] = "NegativeProgress"
    category: ClassVar[str] = PROGRESS
    event: Event
    span: float

    @property
    def message(self) -> str:
        return (
            f"Progress must be positive, time was {self.span} "
            f"for {self.event.type.value} event at {self.event.timestamp.isoformat()}"
        )


class AdProgressNonZero(Violation):
    kind: Literal["AdProgressNonZero"] = "AdProgressNonZero"
    category: ClassVar[str] = AD
    event: Event
    span: float

    @property
    def message(self) -> str:
        return (
            f"Ad progress must be 0, time was {self.span} "
            f"for {self.event.type.value} event at {self.event.timestamp.isoformat()}"
        )


# ---------------------------------------------------------------------------
# Pairwise ordering
# ---------------------------------------------------------------------------


class OutOfOrder(Violation):
    kind: Literal["OutOfOrder"] = "OutOfOrder"
    category: ClassVar[str] = SEQUENCE
    current: Event
    following: Event

    @property
    def message(self) -> str:
        return (
            f"{self.current.type.value} event must not be immediately followed "
            f"by a {self.following.type.value} event.\n"
            f"First Event: {self.current.describe()}\n\n"
            f"Second Event: {self.following.describe()}"
        )


class TimestampsOutOfOrder(Violation):
    kind: Literal["TimestampsOutOfOrder"] = "TimestampsOutOfOrder"
    category: ClassVar[str] = SEQUENCE
    current: Event
    following: Event

    @property
    def message(self) -> str:
        return (
            "Timestamps for events are out of order:\n"
            f"{self.current.describe()}\n\n{self.following.describe()}"
        )


__all__ = [
    "CATEGORIES",
    "CARDINALITY",
    "SEQUENCE",
    "PROGRESS",
    "AD",
    "Violation",
    "NoEvents",
    "NoLoad",
    "MultipleLoad",
    "NoBegin",
    "MultipleBegin",
    "ProgressTooLong",
    "NegativeProgress",
    "AdProgressNonZero",
    "OutOfOrder",
    "TimestampsOutOfOrder",
]
