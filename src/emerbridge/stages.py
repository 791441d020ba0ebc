"""Post-processing chain: optional Formatter and Extractor stages.

A stage is an external helper that receives the working text as its single
trailing argument and prints a replacement. Stages can only ever replace the
working text wholesale or leave it alone; they never fail a run.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from emerbridge.invoker import decode_output, run_process
from emerbridge.result_primitives import Failure
from emerbridge.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Iterable

    from emerbridge.config import Config
    from emerbridge.options import Options
    from emerbridge.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

FORMATTER = "format"
EXTRACTOR = "extract_value"


@dataclass(frozen=True, slots=True)
class Stage:
    """One post-processing helper process."""

    name: str
    command: tuple[str, ...]
    timeout_s: float | None = None

    async def run(self, text: str) -> str | None:
        """Return the helper's trimmed stdout, or None when it has nothing to offer.

        The exit code is not consulted: any non-empty stdout is a candidate.
        Spawn errors and timeouts count as "nothing to offer".
        """
        spawned = await run_process(
            [*self.command, text],
            timeout_s=self.timeout_s,
            timeout_setting="EMERBRIDGE_STAGE_TIMEOUT",
        )
        if isinstance(spawned, Failure):
            log.debug("Stage %s skipped: %s", self.name, spawned.error)
            return None

        outcome = spawned.value
        if outcome.exit_code != 0:
            log.debug("Stage %s exited with code %d", self.name, outcome.exit_code)
        return decode_output(outcome.stdout).strip() or None


async def try_stage(stage: Stage, current: str) -> str:
    """Run ``stage`` on ``current``; keep ``current`` unless it offers a replacement."""
    replacement = await stage.run(current)
    if replacement is None:
        log.debug("Stage %s produced no output; keeping previous text", stage.name)
        return current
    return replacement


async def run_chain(
    stages: Iterable[Stage],
    text: str,
    *,
    ctx: TelemetryContextProtocol | None = None,
) -> str:
    """Thread ``text`` through ``stages`` left to right, one at a time.

    Nothing runs on empty text.
    """
    ctx = ctx or TelemetryContext()
    for stage in stages:
        if not text:
            break
        with ctx(f"stage.{stage.name}"):
            text = await try_stage(stage, text)
    return text


def build_stages(config: Config, options: Options) -> tuple[Stage, ...]:
    """Return the stages ``options`` enables, Formatter before Extractor."""
    stages: list[Stage] = []
    if options.format:
        stages.append(
            Stage(FORMATTER, config.format_command, timeout_s=config.stage_timeout)
        )
    if options.extract_value:
        stages.append(
            Stage(EXTRACTOR, config.value_command, timeout_s=config.stage_timeout)
        )
    return tuple(stages)
