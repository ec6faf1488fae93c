from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pushwire._internal.registry import UNBOUND, BindingRegistry
from pushwire.exceptions import (
    PushwireBindingNotBoundError,
    PushwireConstructionError,
    PushwireError,
    PushwireInvalidConstructorError,
)
from pushwire.oracle import ConstructorSpec, InjectedMember, MetadataOracle

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Resolver:
    """Instantiate types and push bound values into their marked members.

    Class bindings are taken out of the registry before the resolver descends
    into them. A key revisited further down the same resolution tree therefore
    falls through to its instance binding, which exists only once the holding
    object has been constructed. Cycles close when at least one edge is a
    member; cycles made only of constructor parameters fail with
    ``PushwireBindingNotBoundError``.

    No lock is held while user constructors or setters run.
    """

    def __init__(self, registry: BindingRegistry, oracle: MetadataOracle) -> None:
        self._registry = registry
        self._oracle = oracle

    def create(self, target: type[T]) -> T:
        return self.push(self.instantiate(target))

    def get(self, key: Any) -> Any:
        """Return the value bound to ``key``, materializing a class binding first.

        Unbound keys and keys bound to ``None`` both yield ``None``.
        """
        value = self._materialize(key)
        if value is UNBOUND:
            value = self._registry.get_instance(key)
        if value is UNBOUND:
            return None
        return value

    def instantiate(self, target: type[T]) -> T:
        """Build ``target`` through its candidate constructor, without member injection.

        The candidate is the single constructor whose first parameter is
        marked. Constructors whose first parameter is unmarked are skipped
        without further checks. Without a candidate the zero-parameter
        constructor is used.
        """
        candidate: ConstructorSpec | None = None
        arguments: list[Any] = []
        for spec in self._oracle.constructors_of(target):
            if spec.is_nullary or not spec.parameters[0].is_marked:
                continue

            if candidate is not None:
                msg = (
                    f"{target.__qualname__} has multiple valid constructors: "
                    f"{candidate.name} and {spec.name}."
                )
                raise PushwireInvalidConstructorError(msg)
            candidate = spec
            arguments = self._resolve_arguments(target, spec)

        if candidate is None:
            candidate = self._nullary_constructor(target)

        return self._invoke(candidate.invoker, arguments, f"construct {target.__qualname__}")

    def push(self, instance: T) -> T:
        """Assign every marked member of ``instance`` and return it.

        A member whose key still has a class binding materializes it first.
        The new child is pushed only after the member is assigned, which is
        what lets member cycles close.
        """
        for member in self._oracle.members_of(type(instance)):
            target = self._registry.take_class(member.key)
            child: Any = None
            if target is not None:
                logger.debug("Materializing %s as %s", member.key, target.__qualname__)
                child = self.instantiate(target)
                self._store(member.key, child)
                value = child
            else:
                value = self._require(member.key)
            self._assign(instance, member, value)

            if target is not None:
                self.push(child)
        return instance

    def _resolve_arguments(self, target: type[Any], spec: ConstructorSpec) -> list[Any]:
        arguments: list[Any] = []
        for parameter in spec.parameters:
            if not parameter.is_marked:
                msg = (
                    f"All parameters of a candidate constructor must be marked: "
                    f"{spec.name}({parameter.name}) on {target.__qualname__}."
                )
                raise PushwireInvalidConstructorError(msg)
            value = self._materialize(parameter.key)
            if value is UNBOUND:
                value = self._require(parameter.key)
            arguments.append(value)
        return arguments

    def _nullary_constructor(self, target: type[Any]) -> ConstructorSpec:
        for spec in self._oracle.constructors_of(target):
            if spec.is_nullary:
                return spec
        msg = f"{target.__qualname__} has no candidate constructor and no zero-argument constructor."
        raise PushwireConstructionError(msg)

    def _materialize(self, key: Any) -> Any:
        """Build and push the class bound to ``key``, or return ``UNBOUND`` if none is pending."""
        target = self._registry.take_class(key)
        if target is None:
            return UNBOUND
        logger.debug("Materializing %s as %s", key, target.__qualname__)
        instance = self.instantiate(target)
        self._store(key, instance)
        self.push(instance)
        return instance

    def _store(self, key: Any, instance: Any) -> None:
        if not self._registry.put_materialized(key, instance):
            logger.debug("Discarding %r for %s: the key was rebound to a class meanwhile", instance, key)

    def _require(self, key: Any) -> Any:
        value = self._registry.get_instance(key)
        if value is UNBOUND:
            raise PushwireBindingNotBoundError(key)
        return value

    def _assign(self, instance: Any, member: InjectedMember, value: Any) -> None:
        self._invoke(member.setter, [instance, value], f"assign {type(instance).__qualname__}.{member.name}")

    def _invoke(self, func: Callable[..., T], arguments: list[Any], action: str) -> T:
        try:
            return func(*arguments)
        except PushwireError:
            raise
        except Exception as e:
            msg = f"Failed to {action}: {e!r}"
            raise PushwireConstructionError(msg, e) from e
