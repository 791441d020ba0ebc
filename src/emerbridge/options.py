"""Post-processing options for a single invocation."""

from __future__ import annotations

from dataclasses import dataclass

from emerbridge.errors import ConfigurationError


@dataclass(frozen=True)
class Options:
    """Gates for the optional post-processing stages.

    Stages run in a fixed order (Formatter, then Extractor) regardless of
    which flags are set.
    """

    #: Pipe the command output through the Formatter.
    format: bool = False
    #: Pipe the (possibly formatted) output through the Extractor.
    extract_value: bool = False

    def __post_init__(self) -> None:
        """Reject truthy non-bools so a stray string cannot enable a stage."""
        for name in ("format", "extract_value"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(
                    f"{name} must be a bool",
                    hint=f"Pass {name}=True or {name}=False.",
                )
