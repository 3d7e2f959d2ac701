from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import deal

from core.classifier import Absent, classify

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateEntry:
    count: int
    total_bytes: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count must be >= 0")
        if self.total_bytes < 0:
            raise ValueError("total_bytes must be >= 0")


@dataclass(frozen=True)
class AggregateResult:
    """
    Per-type tallies of one input plus the bucket of unclassifiable lines.

    `entries` is keyed by the canonical JSON text of the `type` field.
    `invalid` is None when every line was classified.
    """

    entries: Mapping[str, AggregateEntry] = field(default_factory=dict)
    invalid: Optional[AggregateEntry] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @property
    def type_count(self) -> int:
        return len(self.entries)

    @property
    def total_lines(self) -> int:
        valid = sum(e.count for e in self.entries.values())
        return valid + (self.invalid.count if self.invalid else 0)

    @property
    def total_bytes(self) -> int:
        valid = sum(e.total_bytes for e in self.entries.values())
        return valid + (self.invalid.total_bytes if self.invalid else 0)

    def rows(self) -> List[Tuple[str, AggregateEntry]]:
        """Valid entries in lexicographic key order."""
        return sorted(self.entries.items())


def byte_length(line: str) -> int:
    return len(line.encode("utf-8", errors="surrogatepass"))


def split_lines(text: str) -> List[str]:
    """
    Split on "\\n"; a "\\r" right before a "\\n" belongs to the terminator.

    A trailing newline does not open an extra empty line.
    """
    parts = text.split("\n")
    tail = parts.pop()
    lines = [p[:-1] if p.endswith("\r") else p for p in parts]
    if tail:
        lines.append(tail)
    return lines


@deal.pre(
    lambda lines, log=None: isinstance(lines, Sequence) and not isinstance(lines, str),
    message="lines must be a sequence of lines, not a single string",
)
@deal.ensure(
    lambda lines, log=None, result=None: result.total_lines == sum(1 for s in lines if s),
    message="every non-empty line is counted exactly once",
)
def aggregate(lines: Sequence[str], log: Optional[logging.Logger] = None) -> AggregateResult:
    log = log or _log
    tallies: Dict[str, List[int]] = {}
    invalid: Optional[List[int]] = None

    for line in lines:
        if not line:
            continue

        key = classify(line, log)
        if isinstance(key, Absent):
            if invalid is None:
                invalid = [0, 0]
            slot = invalid
        else:
            slot = tallies.setdefault(key.text, [0, 0])
        slot[0] += 1
        slot[1] += byte_length(line)

    result = AggregateResult(
        entries={k: AggregateEntry(c, b) for k, (c, b) in tallies.items()},
        invalid=AggregateEntry(*invalid) if invalid is not None else None,
    )
    log.debug(
        "Aggregated %d lines into %d types (%d invalid)",
        result.total_lines,
        result.type_count,
        result.invalid.count if result.invalid else 0,
    )
    return result


def aggregate_text(text: str, log: Optional[logging.Logger] = None) -> AggregateResult:
    return aggregate(split_lines(text), log)
