"""Structural and temporal checks over one playback session.

Each check is a pure function ``Sequence[MeterEvent] -> List[Violation]``.
:func:`validate` runs all of them and concatenates the results so callers
always receive the complete picture in one pass.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from oztail.core.events import Event, EventType, MeterEvent
from oztail.core.violations import (
    AD,
    CARDINALITY,
    PROGRESS,
    SEQUENCE,
    AdProgressNonZero,
    MultipleBegin,
    MultipleLoad,
    NegativeProgress,
    NoBegin,
    NoEvents,
    NoLoad,
    OutOfOrder,
    ProgressTooLong,
    TimestampsOutOfOrder,
    Violation,
)

Check = Callable[[Sequence[MeterEvent]], List[Violation]]

# Event types that report no playback span of their own.
INSTANTANEOUS: FrozenSet[EventType] = frozenset(
    {
        EventType.LOAD,
        EventType.BEGIN,
        EventType.AD_BEGIN,
        EventType.AD_COMPLETE,
        EventType.COMPLETE,
    }
)

AD_BOUNDARIES: FrozenSet[EventType] = frozenset({EventType.AD_BEGIN, EventType.AD_COMPLETE})

# current type -> types allowed to follow it immediately
TRANSITIONS: Dict[EventType, FrozenSet[EventType]] = {
    EventType.LOAD: frozenset({EventType.BEGIN, EventType.AD_BEGIN}),
    EventType.BEGIN: frozenset(EventType),
    EventType.AD_BEGIN: frozenset({EventType.AD_COMPLETE}),
    EventType.AD_COMPLETE: frozenset({EventType.BEGIN, EventType.PROGRESS, EventType.AD_BEGIN}),
    EventType.PROGRESS: frozenset({EventType.PROGRESS, EventType.AD_BEGIN, EventType.COMPLETE}),
    EventType.COMPLETE: frozenset(),
}


def is_legal_transition(current: EventType, following: EventType) -> bool:
    return following in TRANSITIONS[current]


def cardinality_violations(session: Sequence[MeterEvent]) -> List[Violation]:
    """Exactly one LOAD and exactly one BEGIN per session."""

    counts = Counter(meter.primary.type for meter in session)
    violations: List[Violation] = []

    loads = counts[EventType.LOAD]
    if loads > 1:
        violations.append(MultipleLoad(count=loads))
    if loads == 0:
        violations.append(NoLoad())

    begins = counts[EventType.BEGIN]
    if begins > 1:
        violations.append(MultipleBegin(count=begins))
    if begins == 0:
        violations.append(NoBegin())

    return violations


def progress_violations(session: Sequence[MeterEvent]) -> List[Violation]:
    """Progress spans must be positive; flagged envelopes are too long.

    The "too long" verdict comes from the upstream service: any envelope
    carrying ``oztamFlags`` at all is reported, whatever its type or span.
    """

    violations: List[Violation] = []
    for meter in session:
        event = meter.primary
        if event.type not in INSTANTANEOUS and event.progress_span <= 0:
            violations.append(NegativeProgress(event=event, span=event.progress_span))

    for meter in session:
        if meter.oztam_flags is not None:
            event = meter.primary
            violations.append(ProgressTooLong(event=event, span=event.progress_span))

    return violations


def ad_progress_violations(session: Sequence[MeterEvent]) -> List[Violation]:
    """Ad boundary events must not cover any playback."""

    violations: List[Violation] = []
    for meter in session:
        event = meter.primary
        if event.type in AD_BOUNDARIES and event.from_position != event.to_position:
            violations.append(AdProgressNonZero(event=event, span=event.progress_span))
    return violations


def pair_violations(current: Event, following: Optional[Event]) -> List[Violation]:
    """Timestamp and grammar checks for two consecutive primary events."""

    if following is None:
        return []

    violations: List[Violation] = []
    if not current.timestamp < following.timestamp:
        violations.append(TimestampsOutOfOrder(current=current, following=following))
    if not is_legal_transition(current.type, following.type):
        violations.append(OutOfOrder(current=current, following=following))
    return violations


def sequence_violations(session: Sequence[MeterEvent]) -> List[Violation]:
    violations: List[Violation] = []
    for index, meter in enumerate(session):
        following = session[index + 1].primary if index + 1 < len(session) else None
        violations.extend(pair_violations(meter.primary, following))
    return violations


CHECKS: Tuple[Tuple[str, Check], ...] = (
    (CARDINALITY, cardinality_violations),
    (PROGRESS, progress_violations),
    (AD, ad_progress_violations),
    (SEQUENCE, sequence_violations),
)


def validate(session: Sequence[MeterEvent]) -> List[Violation]:
    """Return every violation found in ``session`` (empty when conformant)."""

    if not session:
        return [NoEvents()]

    violations: List[Violation] = []
    for _, check in CHECKS:
        violations.extend(check(session))
    return violations


__all__ = [
    "AD_BOUNDARIES",
    "CHECKS",
    "INSTANTANEOUS",
    "TRANSITIONS",
    "ad_progress_violations",
    "cardinality_violations",
    "is_legal_transition",
    "pair_violations",
    "progress_violations",
    "sequence_violations",
    "validate",
]
