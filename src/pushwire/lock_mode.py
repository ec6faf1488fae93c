from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for the binding registry.

    Locks only guard individual registry operations. They are never held
    while user constructors or setters run, so two threads resolving the same
    class binding share one instance and the loser may briefly see the key as
    unbound.
    """

    THREAD = "thread"
    """Guard registry reads and writes with ``threading.Lock``."""

    NONE = "none"
    """Disable locking for containers confined to a single thread."""
