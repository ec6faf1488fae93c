"""Shared pytest fixtures for pushwire tests."""

import pytest

from pushwire.container import Container
from pushwire.lock_mode import LockMode
from pushwire.schema import SchemaOracle
from tests.models import Key


@pytest.fixture()
def container() -> Container:
    """Thread-safe container reading ``Annotated`` markers."""
    return Container(Key)


@pytest.fixture()
def unlocked_container() -> Container:
    """Container with registry locking disabled."""
    return Container(Key, lock_mode=LockMode.NONE)


@pytest.fixture()
def schema_oracle() -> SchemaOracle:
    """Empty registration-DSL oracle for ``Key``."""
    return SchemaOracle(Key)


@pytest.fixture()
def credentials(container: Container) -> Container:
    """Container with USER and PASS bound to plain strings."""
    container.bind_instance(Key.USER, "sam")
    container.bind_instance(Key.PASS, "blah")
    return container
