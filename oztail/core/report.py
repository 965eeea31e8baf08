"""Result of one validation run, grouped for presentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from oztail.core.violations import CATEGORIES, Violation

# Section headings, in display order.
CATEGORY_TITLES: Dict[str, str] = {
    "cardinality": "Checking load and begin events",
    "sequence": "Checking event sequences",
    "progress": "Checking progress events",
    "ad": "Checking ad events",
}

CATEGORY_OK: Dict[str, str] = {
    "cardinality": "All init events OK",
    "sequence": "All events in correct sequence",
    "progress": "All progress events OK",
    "ad": "All ad events are correct",
}


@dataclass(frozen=True)
class ValidationReport:
    session_id: str
    run_id: str
    event_count: int
    violations: Tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return not self.violations

    def by_category(self) -> Dict[str, List[Violation]]:
        """Violations bucketed by category; every category is present."""

        grouped: Dict[str, List[Violation]] = {category: [] for category in CATEGORIES}
        for violation in self.violations:
            grouped[violation.category].append(violation)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "run_id": self.run_id,
            "event_count": self.event_count,
            "passed": self.passed,
            "violations": [violation.to_dict() for violation in self.violations],
        }


__all__ = ["CATEGORY_OK", "CATEGORY_TITLES", "ValidationReport"]
