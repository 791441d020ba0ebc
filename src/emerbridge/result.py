"""Pipeline results: the values a run hands back to its caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

FailureKind = Literal["exit", "spawn", "timeout", "internal"]


@dataclass(frozen=True, slots=True)
class StructuredValue:
    """Working text that parsed as JSON (objects, arrays and bare scalars)."""

    value: Any


@dataclass(frozen=True, slots=True)
class RawText:
    """Non-empty working text that did not parse as JSON."""

    text: str


@dataclass(frozen=True, slots=True)
class SuccessSentinel:
    """The command succeeded but printed nothing."""


@dataclass(frozen=True, slots=True)
class PipelineFailure:
    """The primary command could not produce output.

    ``exit_code`` is set only for ``kind == "exit"``; spawn errors, timeouts
    and internal faults never ran to a normal exit.
    """

    kind: FailureKind
    message: str
    exit_code: int | None = None
    stderr: str = ""


type PipelineResult = StructuredValue | RawText | SuccessSentinel | PipelineFailure


def is_success(result: PipelineResult) -> bool:
    """Return True for every variant except ``PipelineFailure``."""
    return not isinstance(result, PipelineFailure)
