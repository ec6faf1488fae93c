from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Final

from pushwire.lock_mode import LockMode

logger = logging.getLogger(__name__)


class _Unbound:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNBOUND"

    def __bool__(self) -> bool:
        return False


UNBOUND: Final = _Unbound()
"""Returned by ``BindingRegistry.get_instance`` for keys without an instance binding."""

_NULL: Final = object()


class BindingRegistry:
    """Hold class and instance bindings keyed by binding keys.

    A key's visible state after each operation is unbound, a pending class
    binding, or an instance binding. ``take_class`` removes and returns the
    class binding in one step so that concurrent resolvers materialize a
    class binding exactly once.

    Values bound to ``None`` are stored as a private sentinel and reported as
    ``None`` again, which keeps them distinct from ``UNBOUND``.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._class_bindings: dict[Any, type[Any]] = {}
        self._instance_bindings: dict[Any, Any] = {}
        self._lock: AbstractContextManager[Any] = (
            threading.Lock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def bind_class(self, key: Any, target: type[Any]) -> None:
        with self._lock:
            self._class_bindings[key] = target
            previous = self._instance_bindings.pop(key, _NULL)
        self._warn_rebound(key, previous)

    def bind_instance(self, key: Any, value: Any) -> None:
        with self._lock:
            self._class_bindings.pop(key, None)
            previous = self._instance_bindings.get(key, _NULL)
            self._instance_bindings[key] = _NULL if value is None else value
        self._warn_rebound(key, previous)

    def put_materialized(self, key: Any, value: Any) -> bool:
        """Bind ``value`` built from a class binding taken earlier for ``key``.

        A class binding registered after the take wins: ``value`` is not
        bound and ``False`` is returned.
        """
        with self._lock:
            if key in self._class_bindings:
                return False
            previous = self._instance_bindings.get(key, _NULL)
            self._instance_bindings[key] = _NULL if value is None else value
        self._warn_rebound(key, previous)
        return True

    def take_class(self, key: Any) -> type[Any] | None:
        with self._lock:
            return self._class_bindings.pop(key, None)

    def get_instance(self, key: Any) -> Any:
        with self._lock:
            value = self._instance_bindings.get(key, UNBOUND)
        if value is _NULL:
            return None
        return value

    def has_class(self, key: Any) -> bool:
        with self._lock:
            return key in self._class_bindings

    def has_instance(self, key: Any) -> bool:
        with self._lock:
            return key in self._instance_bindings

    def _warn_rebound(self, key: Any, previous: Any) -> None:
        if previous is not _NULL:
            logger.warning("Binding rebound: %s was %r", key, previous)
