from __future__ import annotations

import types
from typing import Any, TypeVar, overload

from pushwire._internal.registry import BindingRegistry
from pushwire._internal.resolver import Resolver
from pushwire._internal.validators import OracleValidator
from pushwire.exceptions import PushwireConfigurationError, PushwireInvalidKeyError
from pushwire.lock_mode import LockMode
from pushwire.oracle import MetadataOracle
from pushwire.reflection import AnnotationOracle

T = TypeVar("T")


class Container:
    """Bind values to keys and push them into objects.

    Keys come from a single key type fixed at creation, usually an
    ``enum.Enum``. Each key is bound either to an instance or, lazily, to a
    class. A class binding is materialized at most once: the first resolution
    that needs it constructs the class, binds the result as the key's instance
    and populates its marked members.

    Examples:
        .. code-block:: python

            class Key(Enum):
                USER = "user"
                PASS = "pass"
                LOGIN = "login"


            class Login:
                username: Annotated[str, Push(Key.USER)]
                password: Annotated[str, Push(Key.PASS)]


            container = Container(Key)
            container.bind_instance(Key.USER, "sam")
            container.bind_instance(Key.PASS, "blah")
            container.bind_class(Key.LOGIN, Login)

            login = container.get(Key.LOGIN, Login)

    """

    def __init__(
        self,
        key_type: type[Any],
        *,
        oracle: MetadataOracle | None = None,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize a container for ``key_type`` keys.

        Args:
            key_type: Type every binding key must be an instance of.
            oracle: Metadata oracle describing push targets. Defaults to an
                ``AnnotationOracle`` reading ``Annotated[..., Push(key)]``.
            lock_mode: ``LockMode.THREAD`` to share the container across
                threads, ``LockMode.NONE`` for single-threaded use.

        Raises:
            PushwireInvalidOracleError: If the oracle disagrees on the key
                type, allows no mark sites, or hides marks at runtime.

        """
        if not isinstance(key_type, type):
            msg = f"Container key type must be a class, got {key_type!r}."
            raise PushwireConfigurationError(msg)

        if oracle is None:
            oracle = AnnotationOracle(key_type)
        OracleValidator().validate(oracle, key_type)

        self._key_type = key_type
        self._oracle = oracle
        self._registry = BindingRegistry(lock_mode)
        self._resolver = Resolver(self._registry, oracle)

    @property
    def key_type(self) -> type[Any]:
        return self._key_type

    @property
    def oracle(self) -> MetadataOracle:
        return self._oracle

    def bind_class(self, key: Any, target: type[Any]) -> None:
        """Bind ``key`` lazily to ``target``.

        Replaces a pending class binding and discards the key's instance
        binding. ``target`` is constructed on the first resolution that
        needs ``key``.

        Raises:
            PushwireInvalidKeyError: If ``key`` is not of the container's key type.
            PushwireConfigurationError: If ``target`` is not a class.

        """
        self._check_key(key)
        self._check_class(target, "bind_class")
        self._registry.bind_class(key, target)

    def bind_instance(self, key: Any, value: Any) -> None:
        """Bind ``key`` to ``value``. ``None`` is a valid value.

        Replacing a non-``None`` value logs a warning naming the key and the
        previous value.
        """
        self._check_key(key)
        self._registry.bind_instance(key, value)

    def create(self, target: type[T]) -> T:
        """Construct ``target`` and push its marked members."""
        self._check_class(target, "create")
        return self._resolver.create(target)

    def push(self, instance: T) -> T:
        """Populate the marked members of an existing object and return it."""
        return self._resolver.push(instance)

    @overload
    def get(self, key: Any) -> Any: ...

    @overload
    def get(self, key: Any, expected_type: type[T]) -> T | None: ...

    def get(self, key: Any, expected_type: type[Any] = object) -> Any:  # noqa: ARG002
        """Return the value bound to ``key``.

        A pending class binding is materialized first. Returns ``None`` for
        unbound keys and for keys bound to ``None``. ``expected_type`` only
        narrows the static return type.
        """
        self._check_key(key)
        return self._resolver.get(key)

    def has_binding(self, key: Any) -> bool:
        """Return whether ``key`` has a class or an instance binding."""
        self._check_key(key)
        return self._registry.has_class(key) or self._registry.has_instance(key)

    def _check_key(self, key: Any) -> None:
        if not isinstance(key, self._key_type):
            raise PushwireInvalidKeyError(key, self._key_type)

    def _check_class(self, target: object, operation: str) -> None:
        # list[int] passes isinstance(..., type) on 3.10
        if not isinstance(target, type) or isinstance(target, types.GenericAlias):
            msg = f"{operation}() target must be a class, got {target!r}."
            raise PushwireConfigurationError(msg)
