"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and factories for
fake executables. Fakes are real scripts run as child processes, so tests
exercise the actual spawn/drain/exit path.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os
from pathlib import Path
import stat
import sys
import textwrap
from typing import TYPE_CHECKING, Any

import pytest

from emerbridge.config import Config

if TYPE_CHECKING:
    from collections.abc import Callable

# =============================================================================
# Fake executables
# =============================================================================


def write_script(directory: Path, name: str, body: str) -> Path:
    """Write an executable Python script whose shebang is this interpreter."""
    path = directory / name
    path.write_text(
        f"#!{sys.executable}\n" + textwrap.dedent(body).lstrip("\n"),
        encoding="utf-8",
    )
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_cli(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory for fake node CLIs built from a script body."""
    counter = iter(range(1000))

    def _make(body: str) -> Path:
        return write_script(tmp_path, f"fake-cli-{next(counter)}", body)

    return _make


@pytest.fixture
def stage_command(tmp_path: Path) -> Callable[[str], tuple[str, ...]]:
    """Return a factory for stage argv prefixes (interpreter + script)."""
    counter = iter(range(1000))

    def _make(body: str) -> tuple[str, ...]:
        script = write_script(tmp_path, f"stage-{next(counter)}.py", body)
        return (sys.executable, str(script))

    return _make


@pytest.fixture
def make_config(fake_cli: Callable[[str], Path]) -> Callable[..., Config]:
    """Build a Config around a fake CLI body, with short timeouts."""

    def _make(cli_body: str = "print('')", **overrides: Any) -> Config:
        kwargs: dict[str, Any] = {
            "cli_path": str(fake_cli(cli_body)),
            "rpc_user": "alice",
            "rpc_password": "s3cret",
            "rpc_port": "6662",
            "rpc_host": "127.0.0.1",
            "process_timeout_s": 10.0,
            "stage_timeout_s": 10.0,
        }
        kwargs.update(overrides)
        return Config(**kwargs)

    return _make


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_bridge_env(request, monkeypatch):
    """Ensure a clean RPC_*/EMERBRIDGE_* environment for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith(("RPC_", "EMERBRIDGE_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("EMERCOIN_CLI_PATH", raising=False)
    monkeypatch.delenv("PORT", raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
