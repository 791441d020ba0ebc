"""Result coercion: interpret final working text as JSON or raw text."""

from __future__ import annotations

import json
import math
from typing import Any

from emerbridge.result import PipelineResult, RawText, StructuredValue, SuccessSentinel
from emerbridge.result_primitives import Failure, Result, Success


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; those cannot be re-serialized.
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def parse_structured(text: str) -> Result[Any, RawText]:
    """Decode ``text`` as a complete JSON document.

    Bare scalars count: ``"42"`` decodes to ``42``. There is no partial
    recovery; anything short of a full parse falls back to ``RawText``.
    """
    try:
        value = json.loads(
            text, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except (ValueError, RecursionError):
        return Failure(RawText(text))
    return Success(value)


def coerce(text: str) -> PipelineResult:
    """Turn final working text into a successful PipelineResult."""
    if not text:
        return SuccessSentinel()
    match parse_structured(text):
        case Success(value=value):
            return StructuredValue(value)
        case Failure(error=raw):
            return raw
