"""Configuration: frozen Config resolved once at process start."""

from __future__ import annotations

from dataclasses import dataclass
import os
import shlex
from typing import TYPE_CHECKING

from emerbridge import constants
from emerbridge.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class Config:
    """Immutable connection and process settings for every pipeline run.

    Build it once (usually with ``Config.from_env()``) and pass it explicitly;
    nothing in emerbridge reads the environment after startup.

    Example:
        config = Config(rpc_user="alice", rpc_password="s3cret")
        result = await run("getblockcount", config=config)
    """

    cli_path: str = constants.DEFAULT_CLI_PATH
    rpc_user: str = constants.DEFAULT_RPC_USER
    rpc_password: str = constants.DEFAULT_RPC_PASSWORD
    rpc_port: str = constants.DEFAULT_RPC_PORT
    rpc_host: str = constants.DEFAULT_RPC_HOST
    #: Argv prefix for the Formatter; the working text is appended as the last argument.
    format_command: tuple[str, ...] = tuple(
        shlex.split(constants.DEFAULT_FORMAT_COMMAND)
    )
    #: Argv prefix for the Extractor; the working text is appended as the last argument.
    value_command: tuple[str, ...] = tuple(
        shlex.split(constants.DEFAULT_VALUE_COMMAND)
    )
    #: Ceiling on simultaneous pipeline runs; ``0`` means unbounded.
    max_concurrency: int = constants.DEFAULT_MAX_CONCURRENCY
    #: Primary process timeout in seconds; ``0`` disables it.
    process_timeout_s: float = constants.DEFAULT_PROCESS_TIMEOUT_S
    #: Formatter/Extractor timeout in seconds; ``0`` disables it.
    stage_timeout_s: float = constants.DEFAULT_STAGE_TIMEOUT_S
    http_port: int = constants.DEFAULT_HTTP_PORT

    def __post_init__(self) -> None:
        """Validate configuration eagerly so bad settings fail at startup."""
        for name in ("cli_path", "rpc_user", "rpc_port", "rpc_host"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{name} must be a non-empty string",
                    hint="Check the RPC_* and EMERCOIN_CLI_PATH environment variables.",
                )
        if not isinstance(self.rpc_password, str):
            raise ConfigurationError("rpc_password must be a string")

        for name in ("format_command", "value_command"):
            command = getattr(self, name)
            if not isinstance(command, tuple) or not command:
                raise ConfigurationError(
                    f"{name} must be a non-empty tuple of arguments",
                    hint="Example: ('python3', 'emercoin-format.py')",
                )

        if self.max_concurrency < 0:
            raise ConfigurationError(
                f"max_concurrency must be ≥ 0, got {self.max_concurrency}",
                hint="Use 0 for no ceiling on simultaneous commands.",
            )
        if self.process_timeout_s < 0 or self.stage_timeout_s < 0:
            raise ConfigurationError(
                "timeouts must be ≥ 0",
                hint="Use 0 to disable a timeout.",
            )
        if not 0 < self.http_port < 65536:
            raise ConfigurationError(
                f"http_port must be between 1 and 65535, got {self.http_port}"
            )

    @property
    def process_timeout(self) -> float | None:
        """Primary timeout as accepted by ``asyncio.timeout`` (``None`` = no limit)."""
        return self.process_timeout_s or None

    @property
    def stage_timeout(self) -> float | None:
        """Stage timeout as accepted by ``asyncio.timeout`` (``None`` = no limit)."""
        return self.stage_timeout_s or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Resolve a Config from environment variables.

        Loads a project ``.env`` first when reading the real environment.
        Unset variables fall back to the built-in defaults.
        """
        if environ is None:
            from dotenv import load_dotenv

            load_dotenv()
            environ = os.environ

        return cls(
            cli_path=environ.get("EMERCOIN_CLI_PATH", constants.DEFAULT_CLI_PATH),
            rpc_user=environ.get("RPC_USER", constants.DEFAULT_RPC_USER),
            rpc_password=environ.get("RPC_PASSWORD", constants.DEFAULT_RPC_PASSWORD),
            rpc_port=environ.get("RPC_PORT", constants.DEFAULT_RPC_PORT),
            rpc_host=environ.get("RPC_HOST", constants.DEFAULT_RPC_HOST),
            format_command=_command(
                environ, "EMERBRIDGE_FORMAT_COMMAND", constants.DEFAULT_FORMAT_COMMAND
            ),
            value_command=_command(
                environ, "EMERBRIDGE_VALUE_COMMAND", constants.DEFAULT_VALUE_COMMAND
            ),
            max_concurrency=_number(
                environ,
                "EMERBRIDGE_MAX_CONCURRENCY",
                constants.DEFAULT_MAX_CONCURRENCY,
                int,
            ),
            process_timeout_s=_number(
                environ,
                "EMERBRIDGE_PROCESS_TIMEOUT",
                constants.DEFAULT_PROCESS_TIMEOUT_S,
                float,
            ),
            stage_timeout_s=_number(
                environ,
                "EMERBRIDGE_STAGE_TIMEOUT",
                constants.DEFAULT_STAGE_TIMEOUT_S,
                float,
            ),
            http_port=_number(environ, "PORT", constants.DEFAULT_HTTP_PORT, int),
        )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(cli_path={self.cli_path!r}, rpc_user={self.rpc_user!r}, "
            f"rpc_password={'[REDACTED]' if self.rpc_password else None}, "
            f"rpc_host={self.rpc_host!r}, rpc_port={self.rpc_port!r}, "
            f"max_concurrency={self.max_concurrency})"
        )

    __repr__ = __str__


def _command(environ: Mapping[str, str], key: str, default: str) -> tuple[str, ...]:
    raw = environ.get(key, "").strip() or default
    try:
        return tuple(shlex.split(raw))
    except ValueError as e:
        raise ConfigurationError(
            f"{key} is not a valid command line: {e}",
            hint="Quote arguments the way a POSIX shell would.",
        ) from e


def _number[N: (int, float)](
    environ: Mapping[str, str], key: str, default: N, kind: type[N]
) -> N:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{key} must be a {kind.__name__}, got {raw!r}",
        ) from e
