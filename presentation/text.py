"""
Plain text formatting.

Turns protocols and indicator sets into markdown-style text for the CLI.
Pure formatting logic, no I/O.
"""

from datetime import date

from domain import Protocol, ProtocolEntryCategory
from domain.indicators import IndicatorSet


def _category_marker(category: ProtocolEntryCategory) -> str:
    """Get a short marker for a finding category."""
    return {
        ProtocolEntryCategory.CONFIRMATION: "+",
        ProtocolEntryCategory.VIOLATION: "-",
        ProtocolEntryCategory.UNCERTAIN: "?",
    }.get(category, " ")


def format_protocol(protocol: Protocol, title: str = "Health Check") -> str:
    """Format a protocol as a findings list followed by the category shares."""
    lines = [f"## {title}", ""]

    if not len(protocol):
        lines.append("*No findings*")
    for entry in protocol:
        lines.append(f"{entry.date.isoformat()}  [{_category_marker(entry.category)}] {entry.text}")

    lines.extend([
        "",
        "| Confirmations | Violations | Uncertain |",
        "|---------------|------------|-----------|",
        f"| {protocol.confirmation_percentage}% | {protocol.violation_percentage}% "
        f"| {protocol.uncertain_percentage}% |",
    ])
    return "\n".join(lines)


def format_indicators(indicator_set: IndicatorSet, day: date | None = None, title: str = "Indicators") -> str:
    """Format an indicator set as a two-column table."""
    heading = f"## {title} - {day.isoformat()}" if day else f"## {title}"
    lines = [heading, "", "| Indicator | Value |", "|-----------|-------|"]

    for name, value in indicator_set.to_dict().items():
        if name == "is_most_recent":
            continue
        lines.append(f"| {name} | {value} |")

    return "\n".join(lines)
