"""Tests for the Result container."""

import pytest

from tatorscout.errors import DecodeError
from tatorscout.result import Result


def test_success_holds_value():
    result = Result.success([1, 2])

    assert result.ok
    assert bool(result) is True
    assert result.error is None
    assert result.unwrap() == [1, 2]


def test_failure_holds_error():
    error = DecodeError("bad")
    result = Result.failure(error)

    assert not result.ok
    assert bool(result) is False
    assert result.value is None
    with pytest.raises(DecodeError):
        result.unwrap()


def test_requires_exactly_one_of_value_or_error():
    with pytest.raises(ValueError):
        Result()
    with pytest.raises(ValueError):
        Result(value=1, error=DecodeError("bad"))
