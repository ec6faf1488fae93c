from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from typing_extensions import Self

from pushwire.exceptions import PushwireConfigurationError, PushwireInvalidKeyError
from pushwire.oracle import (
    ALL_MARK_SITES,
    ConstructorSpec,
    InjectedMember,
    MarkSite,
    ParameterSpec,
    Visibility,
    attribute_setter,
)


class TypeSchema:
    """Fluent description of one type's push targets.

    Obtain instances through ``SchemaOracle.describe``; every method returns
    the schema so declarations chain.

    Examples:
        .. code-block:: python

            oracle = SchemaOracle(Key)
            oracle.describe(Credentials).member("username", Key.USER).constructor(Key.PASS)

    """

    def __init__(self, oracle: SchemaOracle, target: type[Any]) -> None:
        self._oracle = oracle
        self._target = target
        self._members: list[InjectedMember] = []
        self._constructors: list[ConstructorSpec] = []

    @property
    def target(self) -> type[Any]:
        return self._target

    def member(
        self,
        name: str,
        key: Any,
        *,
        setter: Callable[[Any, Any], None] | None = None,
    ) -> Self:
        """Declare a member assigned from ``key`` after construction.

        Args:
            name: Attribute name. Used by the default setter.
            key: Binding key whose value is pushed into the member.
            setter: Optional ``(instance, value)`` callable replacing
                ``setattr(instance, name, value)``.

        """
        self._oracle.check_key(key)
        if setter is None:
            setter = attribute_setter(name)
        self._members.append(InjectedMember(key=key, name=name, setter=setter))
        return self

    def constructor(
        self,
        *keys: Any,
        invoker: Callable[..., Any] | None = None,
        name: str | None = None,
    ) -> Self:
        """Declare a constructor taking one positional argument per entry in ``keys``.

        ``None`` entries declare unmarked parameters. The described type itself
        is called unless ``invoker`` is given.
        """
        parameters = []
        for index, key in enumerate(keys):
            if key is not None:
                self._oracle.check_key(key)
            parameters.append(ParameterSpec(name=f"arg{index}", key=key))

        self._constructors.append(
            ConstructorSpec(
                name=name or f"{self._target.__qualname__}#{len(self._constructors)}",
                parameters=tuple(parameters),
                invoker=invoker or self._target,
            ),
        )
        return self

    def members(self) -> tuple[InjectedMember, ...]:
        return tuple(self._members)

    def constructors(self) -> tuple[ConstructorSpec, ...]:
        return tuple(self._constructors)


class SchemaOracle:
    """Metadata oracle backed by explicit per-type schemas.

    Types that were never described expose one zero-argument constructor and
    no members. Member schemas are inherited along the MRO, base classes
    first; constructor schemas are not.

    Args:
        key_type: Type every declared key must be an instance of.
        mark_sites: Where declarations are honored.

    """

    def __init__(
        self,
        key_type: type[Any],
        *,
        mark_sites: frozenset[MarkSite] = ALL_MARK_SITES,
    ) -> None:
        self._key_type = key_type
        self._mark_sites = frozenset(mark_sites)
        self._schemas: dict[type[Any], TypeSchema] = {}
        self._lock = threading.Lock()

    def describe(self, target: type[Any]) -> TypeSchema:
        """Return the schema of ``target``, creating an empty one on first use."""
        if not isinstance(target, type):
            msg = f"Cannot describe {target!r}: not a class."
            raise PushwireConfigurationError(msg)
        with self._lock:
            schema = self._schemas.get(target)
            if schema is None:
                schema = self._schemas[target] = TypeSchema(self, target)
            return schema

    def check_key(self, key: Any) -> None:
        if not isinstance(key, self._key_type):
            raise PushwireInvalidKeyError(key, self._key_type)

    def key_type(self) -> type[Any]:
        return self._key_type

    def mark_sites(self) -> frozenset[MarkSite]:
        return self._mark_sites

    def visibility(self) -> frozenset[Visibility]:
        return frozenset({Visibility.RUNTIME})

    def members_of(self, target: type[Any]) -> tuple[InjectedMember, ...]:
        if MarkSite.MEMBER not in self._mark_sites:
            return ()
        members: list[InjectedMember] = []
        for klass in reversed(target.__mro__):
            schema = self._schemas.get(klass)
            if schema is not None:
                members.extend(schema.members())
        return tuple(members)

    def constructors_of(self, target: type[Any]) -> tuple[ConstructorSpec, ...]:
        schema = self._schemas.get(target)
        declared = schema.constructors() if schema is not None else ()
        if MarkSite.PARAMETER not in self._mark_sites:
            declared = tuple(spec for spec in declared if spec.is_nullary)
        if any(spec.is_nullary for spec in declared):
            return declared
        default = ConstructorSpec(name=f"{target.__qualname__}()", parameters=(), invoker=target)
        return (*declared, default)
