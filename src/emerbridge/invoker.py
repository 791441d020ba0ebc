"""Primary process invocation.

Every child is spawned without a shell: each argument reaches the executable
as exactly one argv token, whatever characters it contains.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from emerbridge.errors import (
    BridgeError,
    ProcessExitError,
    ProcessTimeoutError,
    SpawnError,
)
from emerbridge.result_primitives import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Sequence

    from emerbridge.config import Config

log = logging.getLogger(__name__)

_PASSWORD_FLAG = "-rpcpassword="


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Exit status and fully drained output of one child process."""

    exit_code: int
    stdout: bytes
    stderr: bytes


def build_argv(config: Config, method: str, params: Sequence[str]) -> list[str]:
    """Return the argv for the node CLI.

    Order is fixed: executable, the four connection flags, the method, then
    each param in order.
    """
    return [
        config.cli_path,
        f"-rpcuser={config.rpc_user}",
        f"{_PASSWORD_FLAG}{config.rpc_password}",
        f"-rpcport={config.rpc_port}",
        f"-rpcconnect={config.rpc_host}",
        method,
        *params,
    ]


def redact_argv(argv: Sequence[str]) -> list[str]:
    """Mask the RPC password so argv can be logged."""
    return [
        f"{_PASSWORD_FLAG}[REDACTED]" if arg.startswith(_PASSWORD_FLAG) else arg
        for arg in argv
    ]


def decode_output(data: bytes) -> str:
    """Decode child output as UTF-8, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


async def run_process(
    argv: Sequence[str],
    *,
    timeout_s: float | None = None,
    timeout_setting: str = "EMERBRIDGE_PROCESS_TIMEOUT",
) -> Result[ProcessOutcome, BridgeError]:
    """Spawn ``argv`` and wait until it exits and both streams are drained.

    Returns ``Failure(SpawnError)`` when the executable cannot be started and
    ``Failure(ProcessTimeoutError)`` when ``timeout_s`` elapses first. A
    non-zero exit is *not* a failure here; callers decide what it means.
    ``timeout_setting`` names the variable that controls ``timeout_s`` and
    ends up in the timeout hint.
    If the awaiting task is cancelled the child is killed before the
    cancellation propagates.
    """
    executable = argv[0]
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # OSError: missing/unexecutable binary. ValueError: NUL byte in an argument.
        return Failure(
            SpawnError(
                f"Failed to start {executable!r}: {e}",
                executable=executable,
                hint="Check EMERCOIN_CLI_PATH and that the binary is executable.",
            )
        )

    try:
        async with asyncio.timeout(timeout_s):
            stdout, stderr = await process.communicate()
    except TimeoutError:
        await _kill(process)
        return Failure(
            ProcessTimeoutError(
                timeout_s or 0.0, executable=executable, setting=timeout_setting
            )
        )
    except asyncio.CancelledError:
        await _kill(process)
        raise

    assert process.returncode is not None
    return Success(
        ProcessOutcome(exit_code=process.returncode, stdout=stdout, stderr=stderr)
    )


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill and reap a child that is still running."""
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
    await process.wait()


async def invoke(
    config: Config, method: str, params: Sequence[str]
) -> Result[str, BridgeError]:
    """Run the node CLI for one command.

    Returns the trimmed stdout on exit code 0. Any other exit becomes
    ``ProcessExitError`` carrying the trimmed stderr; stdout is discarded.
    """
    argv = build_argv(config, method, params)
    log.debug("Invoking %s", redact_argv(argv))

    spawned = await run_process(argv, timeout_s=config.process_timeout)
    if isinstance(spawned, Failure):
        log.warning("Command %s did not run: %s", method, spawned.error)
        return spawned

    outcome = spawned.value
    if outcome.exit_code != 0:
        stderr = decode_output(outcome.stderr).strip()
        log.warning("Command failed with code %d: %s", outcome.exit_code, stderr)
        return Failure(ProcessExitError(outcome.exit_code, stderr))

    return Success(decode_output(outcome.stdout).strip())
