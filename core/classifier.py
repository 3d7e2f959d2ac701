from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

TYPE_FIELD = "type"

_log = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Present:
    """A line whose `type` field was found; `text` is its canonical JSON form."""

    text: str


class Absent(Enum):
    """Marker for lines that are not JSON objects or carry no `type` field."""

    MARKER = "absent"


ABSENT = Absent.MARKER

ClassificationKey = Union[Present, Absent]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def canonical_json(value: Any) -> str:
    """
    Stable serialization of a decoded JSON value.

    Compact separators, sorted object keys, non-ASCII kept verbatim:
    equal values always give equal text.
    """
    return json.dumps(
        value, ensure_ascii=False, allow_nan=False, separators=(",", ":"), sort_keys=True
    )


def classify(line: str, log: Optional[logging.Logger] = None) -> ClassificationKey:
    log = log or _log
    try:
        payload = json.loads(line, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError) as exc:
        log.debug("Error deserializing row: %s", exc)
        return ABSENT

    if not isinstance(payload, dict):
        log.debug("Row is not a JSON object: %s", type(payload).__name__)
        return ABSENT
    if TYPE_FIELD not in payload:
        log.debug("Row has no %r field", TYPE_FIELD)
        return ABSENT

    try:
        # Lone surrogate escapes such as \ud800 decode but cannot be written as UTF-8
        canonical_json(payload).encode("utf-8")
    except ValueError as exc:
        log.debug("Row is not representable as UTF-8 JSON: %s", exc)
        return ABSENT

    return Present(canonical_json(payload[TYPE_FIELD]))
