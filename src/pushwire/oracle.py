from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class MarkSite(Enum):
    """Places where an oracle lets push markers appear."""

    MEMBER = "member"
    """Attributes assigned after construction."""

    PARAMETER = "parameter"
    """Constructor parameters resolved before construction."""


class Visibility(Enum):
    """When an oracle's marks can be observed."""

    RUNTIME = "runtime"
    """Marks are readable while the container resolves objects."""

    STATIC = "static"
    """Marks exist only for static tooling, for example under ``TYPE_CHECKING``."""


@dataclass(frozen=True, slots=True)
class InjectedMember:
    """A marked member of a type together with the callable that assigns it."""

    key: Any
    name: str
    setter: Callable[[Any, Any], None]


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """A constructor parameter. ``key is None`` means the parameter is unmarked."""

    name: str
    key: Any = None

    @property
    def is_marked(self) -> bool:
        return self.key is not None


@dataclass(frozen=True, slots=True)
class ConstructorSpec:
    """An ordered parameter schema plus the callable that builds the object.

    ``invoker`` receives the resolved arguments positionally, in the order of
    ``parameters``.
    """

    name: str
    parameters: tuple[ParameterSpec, ...]
    invoker: Callable[..., Any]

    @property
    def is_nullary(self) -> bool:
        return not self.parameters


@runtime_checkable
class MetadataOracle(Protocol):
    """Expose the injection schema of target types to the resolver.

    The resolver consults an oracle only through these queries, so any
    description mechanism works: ``typing.Annotated`` markers, a registration
    DSL, or generated descriptor tables.
    """

    def members_of(self, target: type[Any]) -> tuple[InjectedMember, ...]:
        """Return the marked members of ``target`` in assignment order."""
        ...

    def constructors_of(self, target: type[Any]) -> tuple[ConstructorSpec, ...]:
        """Return the constructors of ``target`` in candidacy order."""
        ...

    def key_type(self) -> type[Any]:
        """Return the type every marked key is an instance of."""
        ...

    def mark_sites(self) -> frozenset[MarkSite]:
        """Return where markers may appear."""
        ...

    def visibility(self) -> frozenset[Visibility]:
        """Return when markers can be observed."""
        ...


ORACLE_QUERIES: tuple[str, ...] = (
    "members_of",
    "constructors_of",
    "key_type",
    "mark_sites",
    "visibility",
)
ALL_MARK_SITES = frozenset({MarkSite.MEMBER, MarkSite.PARAMETER})


def attribute_setter(name: str) -> Callable[[Any, Any], None]:
    """Return a member setter that assigns ``name`` with ``setattr``."""

    def set_member(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return set_member
