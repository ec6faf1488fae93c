from __future__ import annotations

from typing import Any


class PushwireError(Exception):
    """Represent a base class for all Pushwire-specific failures.

    Catch this type when you want to handle any Pushwire error path without
    matching each concrete exception class individually.

    Args:
        message: Human readable description of the failure.
        cause: Optional underlying exception. It is also attached as
            ``__cause__`` so tracebacks show the original failure.

    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class PushwireConfigurationError(PushwireError):
    """Signal an invalid container, oracle, or constructor configuration.

    Raised at container construction when the metadata oracle is unusable and
    during instantiation when a type's constructors are malformed.
    """


class PushwireInvalidOracleError(PushwireConfigurationError):
    """Signal a metadata oracle that cannot drive resolution.

    Typical fixes include advertising the container's key type from
    ``key_type()``, marking members and/or parameters, and keeping marks
    visible at runtime.
    """


class PushwireInvalidKeyError(PushwireConfigurationError):
    """Signal a key that does not belong to the container's key type."""

    def __init__(self, key: Any, key_type: type[Any]) -> None:
        super().__init__(f"{key!r} is not a {key_type.__qualname__} key")
        self.key = key
        self.key_type = key_type


class PushwireInvalidConstructorError(PushwireConfigurationError):
    """Signal a constructor layout the resolver cannot use.

    Raised when a candidate constructor has unmarked parameters after its
    first one, or when a type has more than one candidate constructor.
    """


class PushwireResolutionError(PushwireError):
    """Signal a runtime failure to satisfy a marked member or parameter."""


class PushwireBindingNotBoundError(PushwireResolutionError):
    """Signal that a required key has neither a class nor an instance binding.

    Constructor-parameter cycles also end here: the class binding of a key
    already under construction has been consumed and its instance is not
    bound yet.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(f"{key} is not bound")
        self.key = key


class PushwireConstructionError(PushwireError):
    """Signal that user code failed while building or populating an object.

    Wraps exceptions raised by constructors, alternate constructors, and
    member setters. The original exception is available as ``cause``.
    """
