"""Tests for timespine.core.result module."""

import pytest

from timespine.core.result import Err, Ok, from_bool, from_optional


class TestOk:
    """Test Ok class."""

    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self):
        assert Ok("hello").unwrap() == "hello"

    def test_map_chaining(self):
        """map can be chained."""
        assert Ok(3).map(lambda x: x * 2).map(lambda x: x + 1).unwrap() == 7

    def test_map_err_is_noop(self):
        result = Ok(1)
        assert result.map_err(lambda e: RuntimeError("never")) is result

    def test_inspect(self):
        """inspect sees the value, inspect_err does not run."""
        seen = []
        Ok(5).inspect(seen.append).inspect_err(seen.append)
        assert seen == [5]

    def test_repr(self):
        assert repr(Ok(3)) == "Ok(3)"


class TestErr:
    """Test Err class."""

    def test_create_err(self):
        error = ValueError("bad")
        result = Err(error)
        assert result.error is error
        assert result.is_err() is True

    def test_unwrap_raises_carried_error(self):
        with pytest.raises(ValueError, match="bad"):
            Err(ValueError("bad")).unwrap()

    def test_map_passes_through(self):
        """Errors short-circuit map."""
        calls = []
        result = Err(ValueError("bad")).map(calls.append)
        assert result.is_err()
        assert calls == []

    def test_map_err(self):
        result = Err(ValueError("bad")).map_err(lambda e: RuntimeError(str(e)))
        assert isinstance(result.error, RuntimeError)

    def test_inspect_err(self):
        seen = []
        Err(ValueError("bad")).inspect(seen.append).inspect_err(lambda e: seen.append(str(e)))
        assert seen == ["bad"]


class TestPatternMatching:
    def test_match_ok(self):
        match Ok(7):
            case Ok(value):
                assert value == 7
            case Err():
                pytest.fail("expected Ok")

    def test_match_err(self):
        match Err(KeyError("day")):
            case Ok():
                pytest.fail("expected Err")
            case Err(error):
                assert isinstance(error, KeyError)


class TestConstructors:
    def test_from_optional(self):
        assert from_optional(5, lambda: ValueError("missing")) == Ok(5)
        assert isinstance(from_optional(None, lambda: ValueError("missing")).error, ValueError)

    def test_from_optional_keeps_falsy_values(self):
        """Only None is absence."""
        assert from_optional(0, lambda: ValueError("missing")) == Ok(0)

    def test_from_bool(self):
        error = ValueError("mismatch")
        assert from_bool(True, "value", lambda: error) == Ok("value")
        assert from_bool(False, "value", lambda: error).error is error

    def test_error_built_only_on_failure(self):
        """Successful results never call the error factory."""
        calls = []

        def factory():
            calls.append(1)
            return ValueError("mismatch")

        from_optional(3, factory)
        from_bool(True, "value", factory)
        assert calls == []

        from_bool(False, "value", factory)
        assert calls == [1]
