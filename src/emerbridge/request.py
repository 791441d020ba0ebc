"""Request normalization."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import TYPE_CHECKING, Any

from emerbridge.errors import ConfigurationError
from emerbridge.options import Options

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class InvocationRequest:
    """One logical command invocation, owned by a single pipeline run."""

    method: str
    params: tuple[str, ...] = ()
    options: Options = field(default_factory=Options)


def normalize_request(
    method: str,
    params: Iterable[Any] | None = None,
    *,
    options: Options | None = None,
) -> InvocationRequest:
    """Validate and normalize inputs into an InvocationRequest.

    Params keep their order. Strings pass through untouched; anything else is
    rendered to the text the CLI expects (JSON for containers and booleans).

    Raises:
        ConfigurationError: If the method is empty or params is not a sequence.
    """
    if not isinstance(method, str) or not method.strip():
        raise ConfigurationError(
            "method is empty or whitespace-only",
            hint="Pass a command name such as 'getblockcount'.",
        )
    if params is None:
        params = ()
    elif isinstance(params, (str, bytes, dict)):
        raise ConfigurationError(
            f"params must be a list of arguments, got {type(params).__name__}",
            hint='Wrap a single argument in a list: "params": ["value"].',
        )

    return InvocationRequest(
        method=method,
        params=tuple(_as_argument(p) for p in params),
        options=options or Options(),
    )


def _as_argument(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, list, dict)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, float) and value.is_integer():
        # 1.0 reaches the CLI as "1"
        return str(int(value))
    return str(value)
