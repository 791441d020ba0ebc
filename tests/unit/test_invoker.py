"""Invoker tests: argv construction and real child-process behavior."""

from __future__ import annotations

import json
import time

import pytest

from emerbridge.config import Config
from emerbridge.errors import ProcessExitError, ProcessTimeoutError, SpawnError
from emerbridge.invoker import (
    ProcessOutcome,
    build_argv,
    invoke,
    redact_argv,
    run_process,
)
from emerbridge.result_primitives import Failure, Success

pytestmark = pytest.mark.unit

ECHO_ARGV = """
import json, sys
print(json.dumps(sys.argv[1:]))
"""


def test_argv_order_is_connection_flags_method_params() -> None:
    cfg = Config(
        cli_path="/usr/bin/emercoin-cli",
        rpc_user="u",
        rpc_password="p",
        rpc_port="1",
        rpc_host="h",
    )

    assert build_argv(cfg, "getblock", ["abc", "2"]) == [
        "/usr/bin/emercoin-cli",
        "-rpcuser=u",
        "-rpcpassword=p",
        "-rpcport=1",
        "-rpcconnect=h",
        "getblock",
        "abc",
        "2",
    ]


def test_redact_argv_masks_only_the_password() -> None:
    argv = build_argv(Config(rpc_password="hunter2"), "getinfo", ["hunter2"])

    redacted = redact_argv(argv)

    assert "-rpcpassword=[REDACTED]" in redacted
    assert "-rpcpassword=hunter2" not in redacted
    # A param that happens to equal the password is not a flag and stays visible.
    assert redacted[-1] == "hunter2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "param",
    [
        "two words",
        "$(touch /tmp/pwned)",
        "semi;colon && pipe | star *",
        "'single' \"double\"",
        '{"json": [1, 2]}',
        "",
        "ünïcødé",
    ],
)
async def test_params_reach_the_binary_as_literal_tokens(make_config, param) -> None:
    cfg = make_config(ECHO_ARGV)

    result = await invoke(cfg, "name_show", [param, "tail"])

    assert isinstance(result, Success)
    assert json.loads(result.value) == [
        "-rpcuser=alice",
        "-rpcpassword=s3cret",
        "-rpcport=6662",
        "-rpcconnect=127.0.0.1",
        "name_show",
        param,
        "tail",
    ]


@pytest.mark.asyncio
async def test_success_returns_trimmed_stdout(make_config) -> None:
    cfg = make_config("print('\\n   12345  \\n')")

    assert await invoke(cfg, "getblockcount", []) == Success("12345")


@pytest.mark.asyncio
async def test_non_zero_exit_returns_exit_error_with_trimmed_stderr(make_config) -> None:
    cfg = make_config(
        """
        import sys
        print("partial stdout")
        sys.stderr.write("  error code: -32601\\nMethod not found\\n")
        sys.exit(1)
        """
    )

    result = await invoke(cfg, "nosuchmethod", [])

    assert isinstance(result, Failure)
    assert isinstance(result.error, ProcessExitError)
    assert result.error.exit_code == 1
    assert result.error.stderr == "error code: -32601\nMethod not found"


@pytest.mark.asyncio
async def test_missing_binary_is_a_spawn_error(tmp_path) -> None:
    cfg = Config(cli_path=str(tmp_path / "does-not-exist"))

    result = await invoke(cfg, "getinfo", [])

    assert isinstance(result, Failure)
    assert isinstance(result.error, SpawnError)
    assert result.error.executable.endswith("does-not-exist")


@pytest.mark.asyncio
async def test_non_executable_file_is_a_spawn_error(tmp_path) -> None:
    path = tmp_path / "not-executable"
    path.write_text("print('hi')\n")

    result = await run_process([str(path)])

    assert isinstance(result, Failure)
    assert isinstance(result.error, SpawnError)


@pytest.mark.asyncio
async def test_nul_byte_in_argument_is_a_spawn_error(make_config) -> None:
    cfg = make_config(ECHO_ARGV)

    result = await invoke(cfg, "name_show", ["bad\x00name"])

    assert isinstance(result, Failure)
    assert isinstance(result.error, SpawnError)


@pytest.mark.asyncio
async def test_large_output_on_both_streams_is_fully_drained(fake_cli) -> None:
    script = fake_cli(
        """
        import sys
        sys.stderr.write("e" * 300_000)
        sys.stdout.write("o" * 300_000)
        """
    )

    result = await run_process([str(script)])

    assert result == Success(
        ProcessOutcome(exit_code=0, stdout=b"o" * 300_000, stderr=b"e" * 300_000)
    )


@pytest.mark.asyncio
async def test_timeout_kills_the_child(make_config) -> None:
    cfg = make_config("import time; time.sleep(60)", process_timeout_s=0.5)

    start = time.monotonic()
    result = await invoke(cfg, "getinfo", [])
    elapsed = time.monotonic() - start

    assert isinstance(result, Failure)
    assert isinstance(result.error, ProcessTimeoutError)
    assert result.error.timeout_s == 0.5
    assert elapsed < 10


@pytest.mark.asyncio
async def test_invalid_utf8_is_replaced_not_raised(make_config) -> None:
    cfg = make_config("import sys; sys.stdout.buffer.write(b'ok\\xff')")

    assert await invoke(cfg, "getinfo", []) == Success("ok�")


@pytest.mark.asyncio
async def test_process_timeout_hint_points_at_process_setting(make_config) -> None:
    cfg = make_config("import time; time.sleep(60)", process_timeout_s=0.3)

    result = await invoke(cfg, "getinfo", [])

    assert isinstance(result, Failure)
    assert "EMERBRIDGE_PROCESS_TIMEOUT" in result.error.hint


@pytest.mark.asyncio
async def test_stage_timeout_hint_points_at_stage_setting(stage_command) -> None:
    argv = [*stage_command("import time; time.sleep(60)"), "text"]

    result = await run_process(
        argv, timeout_s=0.3, timeout_setting="EMERBRIDGE_STAGE_TIMEOUT"
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, ProcessTimeoutError)
    assert "EMERBRIDGE_STAGE_TIMEOUT" in result.error.hint
    assert "EMERBRIDGE_PROCESS_TIMEOUT" not in result.error.hint
