"""Tests for :mod:`tines_sdk.errors`."""

from __future__ import annotations

import copy
import pickle
from typing import Any

import pytest

from tines_sdk.errors import ErrorMessage, ErrorType, TinesError


@pytest.mark.unit
def test_rendering_lists_every_message() -> None:
    error = TinesError(
        ErrorType.REQUEST,
        [ErrorMessage(message="a", details="1"), ErrorMessage(message="b", details="2")],
    )

    assert str(error) == "2 error(s) occurred: a: 1, b: 2"


@pytest.mark.unit
def test_rendering_skips_messages_without_text() -> None:
    error = TinesError(
        ErrorType.SERVER,
        [ErrorMessage(message="", details="ignored"), ErrorMessage(message="kept", details="")],
    )

    assert str(error) == "1 error(s) occurred: kept: "


@pytest.mark.unit
def test_add_collects_problems_and_refreshes_message() -> None:
    error = TinesError()
    assert not error.has_errors()
    assert str(error) == "0 error(s) occurred: "

    error.add("host error", "missing")
    error.add("credential error", "missing")

    assert error.has_errors()
    assert error.args == ("2 error(s) occurred: host error: missing, credential error: missing",)


@pytest.mark.unit
def test_single_carries_type_and_status() -> None:
    error = TinesError.single(ErrorType.SERVER, "boom", "details", status_code=502)

    assert error.type is ErrorType.SERVER
    assert error.status_code == 502
    assert error.errors == [ErrorMessage(message="boom", details="details")]
    assert "status_code=502" in repr(error)


@pytest.mark.unit
def test_error_type_accepts_plain_strings() -> None:
    assert TinesError("server").type is ErrorType.SERVER


@pytest.mark.unit
@pytest.mark.parametrize("clone", [copy.copy, copy.deepcopy, lambda e: pickle.loads(pickle.dumps(e))])
def test_errors_survive_copy_and_pickle(clone: Any) -> None:
    error = TinesError.single(ErrorType.SERVER, "m", "d", status_code=500)

    restored = clone(error)

    assert isinstance(restored, TinesError)
    assert restored.type is ErrorType.SERVER
    assert restored.status_code == 500
    assert restored.errors == error.errors
    assert str(restored) == "1 error(s) occurred: m: d"
