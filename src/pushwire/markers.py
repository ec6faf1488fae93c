from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, NamedTuple, TypeVar, get_args, get_origin

T = TypeVar("T")
_ANNOTATED_MARKER_MIN_ARGS = 2
CONSTRUCTOR_MARKER_ATTR = "__pushwire_constructor__"


class Push(NamedTuple):
    """Mark a member or constructor parameter as a push target.

    Attach ``Push`` metadata to ``typing.Annotated``. The wrapped key names the
    binding whose value is pushed into the annotated slot.

    Examples:
        .. code-block:: python

            class Key(Enum):
                USER = "user"
                PASS = "pass"


            class Credentials:
                username: Annotated[str, Push(Key.USER)]

                def __init__(self, password: Annotated[str, Push(Key.PASS)]) -> None:
                    self.password = password

    """

    key: Any


def constructor(func: Callable[..., T] | classmethod) -> classmethod:  # type: ignore[type-arg]
    """Register a classmethod as an alternate constructor of its class.

    Alternate constructors are offered to the resolver after ``__init__``.
    The first parameter after ``cls`` decides candidacy: when it carries a
    ``Push`` marker every other parameter must carry one too.

    Examples:
        .. code-block:: python

            class Session:
                def __init__(self, token: str) -> None:
                    self.token = token

                @constructor
                def from_user(cls, user: Annotated[str, Push(Key.USER)]) -> Session:
                    return cls(token=f"user:{user}")

    """
    method = func if isinstance(func, classmethod) else classmethod(func)
    setattr(method.__func__, CONSTRUCTOR_MARKER_ATTR, True)
    return method


def is_constructor(candidate: object) -> bool:
    """Return True when candidate is a classmethod registered via ``constructor``."""
    if not isinstance(candidate, classmethod):
        return False
    return bool(getattr(candidate.__func__, CONSTRUCTOR_MARKER_ATTR, False))


def find_marker(annotation: Any, marker_type: type[Any] = Push) -> Any | None:
    """Return the last ``marker_type`` instance in Annotated metadata, if any."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in reversed(metadata) if isinstance(item, marker_type)),
        None,
    )
