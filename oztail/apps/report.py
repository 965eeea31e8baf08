"""Console rendering of a :class:`ValidationReport`."""

from __future__ import annotations

from typing import List

import typer

from oztail.core.report import CATEGORY_OK, CATEGORY_TITLES, ValidationReport


def render_report(report: ValidationReport, color: bool = True) -> List[str]:
    """Return the report as printable lines, one section per check category."""

    def style(text: str, **kwargs) -> str:
        return typer.style(text, **kwargs) if color else text

    lines: List[str] = [
        style(f"Session {report.session_id} ({report.event_count} events, run {report.run_id})", dim=True),
        "",
    ]
    for category, violations in report.by_category().items():
        lines.append(style(CATEGORY_TITLES[category], bold=True))
        if not violations:
            lines.append(style(CATEGORY_OK[category], fg=typer.colors.GREEN))
        for violation in violations:
            lines.append(style(violation.message, fg=typer.colors.RED))
        lines.append("")

    if report.passed:
        lines.append(style("Basic validation PASSED", fg=typer.colors.GREEN))
    else:
        lines.append(style(f"Validation FAILED ({len(report.violations)} violations)", fg=typer.colors.RED))
    return lines


__all__ = ["render_report"]
