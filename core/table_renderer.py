from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

import deal

from core.aggregator import AggregateResult

HEADERS = ("Type", "Count", "Bytes")


@deal.pre(lambda n: isinstance(n, int) and n >= 0, message="n must be a non-negative int")
@deal.post(lambda result: result >= 1)
def digit_length(n: int) -> int:
    """Characters needed to print n in decimal (0 -> 1)."""
    return len(str(n))


@dataclass(frozen=True)
class ColumnWidths:
    type: int
    count: int
    bytes: int


def column_widths(result: AggregateResult) -> ColumnWidths:
    # Header words set the floor for each column
    rows = result.rows()
    return ColumnWidths(
        type=max([len(key) for key, _ in rows] + [len(HEADERS[0])]),
        count=max([digit_length(e.count) for _, e in rows] + [len(HEADERS[1])]),
        bytes=max([digit_length(e.total_bytes) for _, e in rows] + [len(HEADERS[2])]),
    )


def _border(w: ColumnWidths, left: str, fill: str, mid: str, right: str) -> str:
    segments = [fill * (width + 2) for width in (w.type, w.count, w.bytes)]
    return left + mid.join(segments) + right


def render_table(result: AggregateResult) -> List[str]:
    w = column_widths(result)
    lines = [
        _border(w, "┏", "━", "┳", "┓"),
        f"┃ {HEADERS[0]:<{w.type}} ┃ {HEADERS[1]:<{w.count}} ┃ {HEADERS[2]:<{w.bytes}} ┃",
        _border(w, "┡", "━", "╇", "┩"),
    ]
    for key, entry in result.rows():
        lines.append(
            f"│ {key:<{w.type}} │ {entry.count:>{w.count}} │ {entry.total_bytes:>{w.bytes}} │"
        )
    lines.append(_border(w, "└", "─", "┴", "┘"))
    return lines


def render(result: AggregateResult) -> List[str]:
    """
    Full report: invalid-line summary (if any), type count, then the table.

    The table is omitted when no valid type was found.
    """
    lines: List[str] = []
    if result.invalid is not None:
        lines.append(
            f"Found {result.invalid.count} invalid log lines ({result.invalid.total_bytes} bytes)"
        )
    lines.append(f"Found {result.type_count} valid log types")
    if result.type_count:
        lines.extend(render_table(result))
    return lines


def write_report(result: AggregateResult, sink: Callable[[str], None]) -> None:
    # Single write: the report goes out whole or not at all
    sink("\n".join(render(result)))
