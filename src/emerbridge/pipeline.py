"""The pipeline orchestrator.

Runs Invoker → Formatter → Extractor → Coercer for one request. Only the
Invoker's outcome can fail a run: a failing stage leaves the working text
untouched, and text that does not parse comes back as ``RawText``.

Concurrency: each run owns its child processes. ``Config.max_concurrency``
bounds how many runs may be in flight at once; extra runs wait for a slot.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from emerbridge.coerce import coerce
from emerbridge.config import Config
from emerbridge.errors import (
    BridgeError,
    ProcessExitError,
    ProcessTimeoutError,
    SpawnError,
)
from emerbridge.invoker import invoke
from emerbridge.result import PipelineFailure
from emerbridge.result_primitives import Failure
from emerbridge.stages import build_stages, run_chain
from emerbridge.telemetry import TelemetryContext

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from emerbridge.request import InvocationRequest
    from emerbridge.result import PipelineResult
    from emerbridge.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)


class Pipeline:
    """Executes invocation requests against one immutable Config.

    Share a single instance across requests so the concurrency ceiling
    applies process-wide.
    """

    def __init__(
        self,
        config: Config,
        *,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Connection and process settings, fixed for the pipeline's lifetime.
            telemetry: Optional telemetry context (defaults to env-driven).
        """
        self.config = config
        self._ctx = telemetry or TelemetryContext()
        self._limiter = (
            asyncio.Semaphore(config.max_concurrency)
            if config.max_concurrency > 0
            else None
        )

    def _slot(self) -> AbstractAsyncContextManager[object]:
        return self._limiter or contextlib.nullcontext()

    async def execute(self, request: InvocationRequest) -> PipelineResult:
        """Run one request to completion.

        Never raises for process-level problems; they come back as
        ``PipelineFailure``. Cancellation still propagates (after the
        current child is killed).
        """
        async with self._slot():
            try:
                return await self._run(request)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                log.exception("Pipeline run for %s failed unexpectedly", request.method)
                self._ctx.count("pipeline.internal_error")
                return PipelineFailure(
                    kind="internal", message=str(e) or type(e).__name__
                )

    async def _run(self, request: InvocationRequest) -> PipelineResult:
        ctx = self._ctx
        with ctx("pipeline.invoke", method=request.method):
            invoked = await invoke(self.config, request.method, request.params)

        if isinstance(invoked, Failure):
            ctx.count("pipeline.failure", method=request.method)
            return failure_from_error(invoked.error)

        stages = build_stages(self.config, request.options)
        text = await run_chain(stages, invoked.value, ctx=ctx)
        return coerce(text)


def failure_from_error(error: BridgeError) -> PipelineFailure:
    """Map an Invoker error onto the PipelineFailure variant."""
    if isinstance(error, ProcessExitError):
        return PipelineFailure(
            kind="exit",
            message=str(error),
            exit_code=error.exit_code,
            stderr=error.stderr,
        )
    if isinstance(error, SpawnError):
        return PipelineFailure(kind="spawn", message=str(error))
    if isinstance(error, ProcessTimeoutError):
        return PipelineFailure(kind="timeout", message=str(error))
    return PipelineFailure(kind="internal", message=str(error))


def create_pipeline(config: Config | None = None) -> Pipeline:
    """Create a pipeline, resolving Config from the environment when omitted.

    This is the only place where ambient configuration is read.
    """
    return Pipeline(config if config is not None else Config.from_env())
