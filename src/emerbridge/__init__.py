"""emerbridge: run node CLI commands through a staged post-processing pipeline.

Public API:
    - run(): One-shot command execution
    - Pipeline: Reusable orchestrator with a shared concurrency ceiling
    - Config: Immutable connection and process settings
    - Options: Formatter/Extractor gates
    - PipelineResult variants: StructuredValue, RawText, SuccessSentinel, PipelineFailure
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("emerbridge")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

from emerbridge.config import Config
from emerbridge.errors import (
    BridgeError,
    ConfigurationError,
    ProcessExitError,
    ProcessTimeoutError,
    SpawnError,
)
from emerbridge.options import Options
from emerbridge.pipeline import Pipeline, create_pipeline
from emerbridge.request import InvocationRequest, normalize_request
from emerbridge.result import (
    PipelineFailure,
    PipelineResult,
    RawText,
    StructuredValue,
    SuccessSentinel,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("emerbridge").addHandler(logging.NullHandler())


async def run(
    method: str,
    params: Iterable[Any] = (),
    *,
    config: Config,
    format: bool = False,  # noqa: A002
    extract_value: bool = False,
) -> PipelineResult:
    """Run a single command through a fresh pipeline.

    Args:
        method: CLI command name, passed through verbatim.
        params: Positional arguments, each passed as one argv token.
        config: Connection and process settings.
        format: Pipe the output through the Formatter.
        extract_value: Pipe the output through the Extractor.

    Returns:
        A PipelineResult; failures come back as ``PipelineFailure``.

    Example:
        config = Config.from_env()
        result = await run("getblockhash", [0], config=config)
        if isinstance(result, StructuredValue):
            print(result.value)
    """
    request = normalize_request(
        method, params, options=Options(format=format, extract_value=extract_value)
    )
    return await Pipeline(config).execute(request)


__all__ = [
    "BridgeError",
    "Config",
    "ConfigurationError",
    "InvocationRequest",
    "Options",
    "Pipeline",
    "PipelineFailure",
    "PipelineResult",
    "ProcessExitError",
    "ProcessTimeoutError",
    "RawText",
    "SpawnError",
    "StructuredValue",
    "SuccessSentinel",
    "create_pipeline",
    "normalize_request",
    "run",
]
