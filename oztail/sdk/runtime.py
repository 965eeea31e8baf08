from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from oztail.core.events import MeterEvent
from oztail.core.report import ValidationReport
from oztail.core.validator import validate

from .config import SDK_CONFIG
from .ids import elapsed_ms, new_run_id, now_monotonic_ns
from .registry import REGISTRY

logger = logging.getLogger(__name__)


def create_source(name: Optional[str] = None, **kwargs):
    """Instantiate the session source registered as ``name`` (``http``/``file``)."""
    return REGISTRY.create(SDK_CONFIG.source_key(name or SDK_CONFIG.default_source), **kwargs)


def check_events(events: Sequence[MeterEvent], session_id: str = "inline",
                 run_id: Optional[str] = None) -> ValidationReport:
    run_id = run_id or new_run_id()
    start_ns = now_monotonic_ns()
    violations = validate(events)
    for violation in violations:
        logger.debug("[%s] %s: %s", run_id, violation.kind, violation.message)
    logger.info(
        "[%s] session %s: %d events, %d violations (%.1f ms)",
        run_id, session_id, len(events), len(violations), elapsed_ms(start_ns),
    )
    return ValidationReport(
        session_id=session_id,
        run_id=run_id,
        event_count=len(events),
        violations=tuple(violations),
    )


class ValidationSession:
    """Fetch one session from a source and validate it."""

    def __init__(self, session_id: str, source=None):
        self.session_id = session_id
        self.run_id = new_run_id()
        self.source = source if source is not None else create_source()

    def fetch(self) -> List[MeterEvent]:
        return self.source.fetch(self.session_id)

    def run(self) -> ValidationReport:
        return check_events(self.fetch(), session_id=self.session_id, run_id=self.run_id)

    def close(self) -> None:
        self.source.close()
