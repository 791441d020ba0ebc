"""Request normalization and option validation."""

from __future__ import annotations

import pytest

from emerbridge.errors import ConfigurationError
from emerbridge.options import Options
from emerbridge.request import InvocationRequest, normalize_request

pytestmark = pytest.mark.unit


def test_strings_pass_through_in_order() -> None:
    req = normalize_request("name_show", ["dns:example.emc", "utf8"])

    assert req == InvocationRequest(
        method="name_show", params=("dns:example.emc", "utf8"), options=Options()
    )


def test_non_string_params_render_as_cli_text() -> None:
    req = normalize_request(
        "sendmany",
        ["", {"EdFwYw4Mo2Zq6CFM2yNJgXvE2DTJxgdBRX": 0.5}, 1, True, None, [1, 2]],
    )

    assert req.params == (
        "",
        '{"EdFwYw4Mo2Zq6CFM2yNJgXvE2DTJxgdBRX":0.5}',
        "1",
        "true",
        "null",
        "[1,2]",
    )


def test_missing_params_mean_no_arguments() -> None:
    assert normalize_request("getblockcount", None).params == ()
    assert normalize_request("getblockcount").params == ()


@pytest.mark.parametrize("method", ["", "   ", None])
def test_empty_method_is_rejected(method) -> None:
    with pytest.raises(ConfigurationError):
        normalize_request(method)


@pytest.mark.parametrize("params", ["abc", b"abc", {"a": 1}])
def test_scalar_params_are_rejected(params) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        normalize_request("help", params)

    assert exc_info.value.hint is not None


def test_options_default_to_no_post_processing() -> None:
    opts = Options()

    assert opts.format is False
    assert opts.extract_value is False


def test_options_reject_truthy_non_bools() -> None:
    with pytest.raises(ConfigurationError):
        Options(format="yes")  # type: ignore[arg-type]


def test_request_is_immutable() -> None:
    req = normalize_request("getinfo")

    with pytest.raises(AttributeError):
        req.method = "stop"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("param", "expected"),
    [(1.0, "1"), (-3.0, "-3"), (0.5, "0.5"), (1e-8, "1e-08"), (6662, "6662")],
)
def test_numbers_render_without_trailing_zero_fraction(param, expected) -> None:
    assert normalize_request("getblockhash", [param]).params == (expected,)
