"""Error types carry the details callers render."""

from __future__ import annotations

import pytest

from emerbridge.errors import (
    BridgeError,
    ConfigurationError,
    ProcessExitError,
    ProcessTimeoutError,
    SpawnError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("bad"),
        SpawnError("nope", executable="emercoin-cli"),
        ProcessExitError(1, "boom"),
        ProcessTimeoutError(3, executable="emercoin-cli"),
    ],
)
def test_all_errors_share_the_base(error) -> None:
    assert isinstance(error, BridgeError)


def test_exit_error_message_and_fields() -> None:
    error = ProcessExitError(127, "not found")

    assert str(error) == "Command failed with exit code 127"
    assert error.exit_code == 127
    assert error.stderr == "not found"
    assert error.hint is None


def test_timeout_error_carries_a_hint() -> None:
    error = ProcessTimeoutError(300.0, executable="emercoin-cli")

    assert str(error) == "Command timed out after 300s"
    assert error.hint is not None
    assert "EMERBRIDGE_PROCESS_TIMEOUT" in error.hint


def test_hint_is_keyword_only() -> None:
    error = ConfigurationError("RPC_PORT must be numeric", hint="Use 6662.")

    assert error.hint == "Use 6662."
    with pytest.raises(TypeError):
        ConfigurationError("msg", "positional hint")  # type: ignore[misc]


def test_timeout_hint_names_the_controlling_setting() -> None:
    error = ProcessTimeoutError(
        30.0, executable="python3", setting="EMERBRIDGE_STAGE_TIMEOUT"
    )

    assert error.hint == "Raise EMERBRIDGE_STAGE_TIMEOUT or set it to 0 to disable."
