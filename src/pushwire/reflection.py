from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Iterator
from typing import Any, get_type_hints

from pushwire.exceptions import PushwireConfigurationError, PushwireInvalidOracleError
from pushwire.markers import Push, find_marker, is_constructor
from pushwire.oracle import (
    ALL_MARK_SITES,
    ConstructorSpec,
    InjectedMember,
    MarkSite,
    ParameterSpec,
    Visibility,
    attribute_setter,
)

_SKIPPED_PARAMETER_KINDS = (
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
)


class AnnotationOracle:
    """Read push targets from ``typing.Annotated`` metadata at runtime.

    Members are class-level annotations, inherited ones included, whose
    metadata carries a marker. Constructors are ``__init__`` followed by the
    classmethods registered with ``pushwire.constructor``.

    Unmarked parameters with a default value, ``self``/``cls``, and variadic
    parameters are left out of constructor schemas, so ``__init__(self, retries=3)``
    counts as a zero-parameter constructor.

    Args:
        key_type: Type every marker key must be an instance of.
        marker: Marker class to look for. It must expose a ``key`` attribute.
        mark_sites: Where markers are honored. Markers found elsewhere are
            ignored.

    """

    def __init__(
        self,
        key_type: type[Any],
        *,
        marker: type[Any] = Push,
        mark_sites: frozenset[MarkSite] = ALL_MARK_SITES,
    ) -> None:
        if not _exposes_key(marker):
            msg = f"Marker {marker.__qualname__} must expose a 'key' field."
            raise PushwireInvalidOracleError(msg)

        self._key_type = key_type
        self._marker = marker
        self._mark_sites = frozenset(mark_sites)
        self._members_cache: dict[type[Any], tuple[InjectedMember, ...]] = {}
        self._constructors_cache: dict[type[Any], tuple[ConstructorSpec, ...]] = {}

    def key_type(self) -> type[Any]:
        return self._key_type

    def mark_sites(self) -> frozenset[MarkSite]:
        return self._mark_sites

    def visibility(self) -> frozenset[Visibility]:
        return frozenset({Visibility.RUNTIME})

    def members_of(self, target: type[Any]) -> tuple[InjectedMember, ...]:
        cached = self._members_cache.get(target)
        if cached is not None:
            return cached

        members: tuple[InjectedMember, ...] = ()
        if MarkSite.MEMBER in self._mark_sites:
            hints = self._type_hints(target, target)
            members = tuple(
                InjectedMember(
                    key=self._marker_key(marker, f"{target.__qualname__}.{name}"),
                    name=name,
                    setter=attribute_setter(name),
                )
                for name, hint in hints.items()
                if (marker := find_marker(hint, self._marker)) is not None
            )

        self._members_cache[target] = members
        return members

    def constructors_of(self, target: type[Any]) -> tuple[ConstructorSpec, ...]:
        cached = self._constructors_cache.get(target)
        if cached is not None:
            return cached

        if not isinstance(target, type) or isinstance(target, types.GenericAlias):
            msg = f"Cannot describe constructors of {target!r}: not a class."
            raise PushwireConfigurationError(msg)

        constructors = [self._describe_init(target)]
        constructors.extend(
            self._describe_callable(target, name, getattr(target, name))
            for name in _iter_alternate_constructors(target)
        )

        result = tuple(constructors)
        self._constructors_cache[target] = result
        return result

    def _describe_init(self, target: type[Any]) -> ConstructorSpec:
        if not inspect.isfunction(inspect.unwrap(target.__init__)):
            # object.__init__ and other builtin initializers
            return ConstructorSpec(name=f"{target.__qualname__}.__init__", parameters=(), invoker=target)
        return self._describe_callable(target, "__init__", target.__init__, invoker=target, bound=False)

    def _describe_callable(
        self,
        target: type[Any],
        name: str,
        func: Callable[..., Any],
        *,
        invoker: Callable[..., Any] | None = None,
        bound: bool = True,
    ) -> ConstructorSpec:
        where = f"{target.__qualname__}.{name}"
        # signature annotations keep Annotated intact where get_type_hints
        # would wrap None defaults in Optional on 3.10
        try:
            signature = inspect.signature(func, eval_str=True)
        except NameError as e:
            msg = f"Cannot resolve annotations of {where}: {e}"
            raise PushwireConfigurationError(msg, e) from e
        except (TypeError, ValueError) as e:
            msg = f"Cannot read the signature of {where}: {e}"
            raise PushwireConfigurationError(msg, e) from e

        parameters = list(signature.parameters.values())
        if not bound:
            # unbound __init__ still lists self
            parameters = parameters[1:]

        specs: list[ParameterSpec] = []
        layout: list[tuple[inspect.Parameter, bool]] = []
        for parameter in parameters:
            if parameter.kind in _SKIPPED_PARAMETER_KINDS:
                continue
            marker = None
            if MarkSite.PARAMETER in self._mark_sites:
                marker = find_marker(parameter.annotation, self._marker)
            if marker is None and parameter.default is not inspect.Parameter.empty:
                layout.append((parameter, False))
                continue
            key = None if marker is None else self._marker_key(marker, f"{where}({parameter.name})")
            specs.append(ParameterSpec(name=parameter.name, key=key))
            layout.append((parameter, True))

        return ConstructorSpec(
            name=where,
            parameters=tuple(specs),
            invoker=_signature_invoker(invoker or func, layout),
        )

    def _type_hints(self, obj: Any, target: type[Any]) -> dict[str, Any]:
        try:
            return get_type_hints(obj, include_extras=True)
        except (TypeError, NameError) as e:
            msg = f"Cannot resolve annotations of {target.__qualname__}: {e}"
            raise PushwireConfigurationError(msg, e) from e

    def _marker_key(self, marker: Any, where: str) -> Any:
        key = marker.key
        if not isinstance(key, self._key_type):
            msg = f"Marker on {where} carries {key!r}, expected a {self._key_type.__qualname__} key."
            raise PushwireConfigurationError(msg)
        return key


def _exposes_key(marker: type[Any]) -> bool:
    if "key" in getattr(marker, "_fields", ()):
        return True
    return "key" in getattr(marker, "__annotations__", {}) or hasattr(marker, "key")


def _iter_alternate_constructors(target: type[Any]) -> Iterator[str]:
    seen: set[str] = set()
    for klass in target.__mro__:
        for name, attribute in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if is_constructor(attribute):
                yield name


def _signature_invoker(
    func: Callable[..., Any],
    layout: list[tuple[inspect.Parameter, bool]],
) -> Callable[..., Any]:
    """Map resolved arguments, given in declaration order, onto ``func``'s signature.

    ``layout`` pairs every non-variadic parameter with whether it receives a
    resolved argument. Positional-only parameters left out of the schema but
    followed by a resolved one are passed their defaults so later arguments
    keep their slots.
    """
    prefix = [entry for entry in layout if entry[0].kind is inspect.Parameter.POSITIONAL_ONLY]
    while prefix and not prefix[-1][1]:
        prefix.pop()
    keyword_names = [
        parameter.name
        for parameter, selected in layout
        if selected and parameter.kind is not inspect.Parameter.POSITIONAL_ONLY
    ]
    if not keyword_names and all(selected for _, selected in prefix):
        return func

    def invoke(*args: Any) -> Any:
        values = iter(args)
        positional = [next(values) if selected else parameter.default for parameter, selected in prefix]
        keywords = dict(zip(keyword_names, values))
        return func(*positional, **keywords)

    return invoke
