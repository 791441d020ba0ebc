"""Exception hierarchy for emerbridge.

Errors are values first: components hand them back inside a ``Failure``
rather than raising across a stage boundary. Only configuration problems are
raised directly, since they happen before any pipeline run exists.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base exception for all emerbridge errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(BridgeError):
    """Configuration validation or resolution failed."""


class SpawnError(BridgeError):
    """The executable is missing or could not be launched.

    There is no exit code: the child never ran.
    """

    def __init__(
        self, message: str, *, executable: str, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.executable = executable


class ProcessExitError(BridgeError):
    """The primary process exited with a non-zero status."""

    def __init__(self, exit_code: int, stderr: str) -> None:
        super().__init__(f"Command failed with exit code {exit_code}")
        self.exit_code = exit_code
        self.stderr = stderr


class ProcessTimeoutError(BridgeError):
    """A child process outlived its timeout and was killed."""

    def __init__(
        self,
        timeout_s: float,
        *,
        executable: str,
        setting: str = "EMERBRIDGE_PROCESS_TIMEOUT",
    ) -> None:
        super().__init__(
            f"Command timed out after {timeout_s:g}s",
            hint=f"Raise {setting} or set it to 0 to disable.",
        )
        self.timeout_s = timeout_s
        self.executable = executable
