from __future__ import annotations

from typing import Any

from pushwire.exceptions import PushwireInvalidOracleError
from pushwire.oracle import ALL_MARK_SITES, ORACLE_QUERIES, Visibility


class OracleValidator:
    """Validates a metadata oracle before a container starts using it."""

    def validate(self, oracle: object, key_type: type[Any]) -> None:
        """Raise ``PushwireInvalidOracleError`` naming the first violated rule."""
        for query in ORACLE_QUERIES:
            if not callable(getattr(oracle, query, None)):
                msg = f"Metadata oracle {type(oracle).__qualname__} is missing the '{query}()' query."
                raise PushwireInvalidOracleError(msg)

        oracle_key_type = oracle.key_type()  # type: ignore[attr-defined]
        if oracle_key_type is not key_type:
            msg = (
                f"Metadata oracle exposes keys of type {_type_name(oracle_key_type)}, "
                f"but the container is keyed by {_type_name(key_type)}."
            )
            raise PushwireInvalidOracleError(msg)

        if not ALL_MARK_SITES & frozenset(oracle.mark_sites()):  # type: ignore[attr-defined]
            msg = "Metadata oracle must allow marks on members and/or parameters."
            raise PushwireInvalidOracleError(msg)

        if Visibility.RUNTIME not in frozenset(oracle.visibility()):  # type: ignore[attr-defined]
            msg = "Metadata oracle marks must be visible at runtime."
            raise PushwireInvalidOracleError(msg)


def _type_name(candidate: object) -> str:
    return getattr(candidate, "__qualname__", repr(candidate))
