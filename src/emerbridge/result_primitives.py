"""Result values passed between pipeline components.

A component never raises for an expected failure; it returns ``Failure``
and lets the orchestrator decide what the failure means for the run.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure")


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome, carrying the error value."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]
