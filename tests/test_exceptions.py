"""Tests for the exception hierarchy."""

import pytest

from pushwire.container import Container
from pushwire.exceptions import (
    PushwireBindingNotBoundError,
    PushwireConfigurationError,
    PushwireConstructionError,
    PushwireError,
    PushwireInvalidConstructorError,
    PushwireInvalidKeyError,
    PushwireInvalidOracleError,
    PushwireResolutionError,
)
from tests.models import Key, Login


class Exploding:
    def __init__(self) -> None:
        raise ValueError("boom")


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        ("error_type", "parent"),
        [
            (PushwireConfigurationError, PushwireError),
            (PushwireInvalidOracleError, PushwireConfigurationError),
            (PushwireInvalidKeyError, PushwireConfigurationError),
            (PushwireInvalidConstructorError, PushwireConfigurationError),
            (PushwireResolutionError, PushwireError),
            (PushwireBindingNotBoundError, PushwireResolutionError),
            (PushwireConstructionError, PushwireError),
        ],
    )
    def test_subclass_relationships(self, error_type: type, parent: type) -> None:
        assert issubclass(error_type, parent)

    def test_base_is_exception(self) -> None:
        assert issubclass(PushwireError, Exception)

    def test_can_catch_all_with_base(self, container: Container) -> None:
        container.bind_class(Key.X, Login)

        with pytest.raises(PushwireError):
            container.get(Key.X)


class TestExceptionAttributes:
    def test_message_and_cause(self) -> None:
        cause = RuntimeError("inner")
        exc = PushwireConstructionError("outer", cause)

        assert exc.message == "outer"
        assert exc.cause is cause
        assert exc.__cause__ is cause
        assert str(exc) == "outer"

    def test_cause_defaults_to_none(self) -> None:
        exc = PushwireResolutionError("missing")

        assert exc.cause is None
        assert exc.__cause__ is None

    def test_binding_not_bound_names_key(self) -> None:
        exc = PushwireBindingNotBoundError(Key.PASS)

        assert exc.key is Key.PASS
        assert str(exc) == "Key.PASS is not bound"

    def test_invalid_key_names_key_and_type(self) -> None:
        exc = PushwireInvalidKeyError("pass", Key)

        assert exc.key == "pass"
        assert exc.key_type is Key
        assert str(exc) == "'pass' is not a Key key"


class TestConstructionError:
    def test_wraps_constructor_failure(self, container: Container) -> None:
        container.bind_class(Key.X, Exploding)

        with pytest.raises(PushwireConstructionError) as exc_info:
            container.get(Key.X)

        assert isinstance(exc_info.value.cause, ValueError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert "Exploding" in str(exc_info.value)
