"""Key type and target classes shared by the container test suites."""

from enum import Enum
from typing import Annotated

from pushwire import Push


class Key(Enum):
    USER = "user"
    PASS = "pass"
    X = "x"


class OtherKey(Enum):
    USER = "user"


class Login:
    username: Annotated[str, Push(Key.USER)]
    password: Annotated[str, Push(Key.PASS)]


class ConstructedLogin:
    def __init__(
        self,
        username: Annotated[str, Push(Key.USER)],
        password: Annotated[str, Push(Key.PASS)],
    ) -> None:
        self.username = username
        self.password = password


class MixedLogin:
    password: Annotated[str, Push(Key.PASS)]

    def __init__(self, username: Annotated[str, Push(Key.USER)]) -> None:
        self.username = username


class B:
    pass


class A:
    def __init__(self, b: Annotated[B, Push(Key.USER)]) -> None:
        self.b = b


class Holder:
    a: Annotated[A, Push(Key.X)]


class D:
    e: Annotated["E", Push(Key.X)]


class E:
    c: Annotated["C", Push(Key.PASS)]


class C:
    def __init__(self, d: Annotated[D, Push(Key.USER)]) -> None:
        self.d = d


class Alpha:
    beta: Annotated["Beta", Push(Key.PASS)]


class Beta:
    gamma: Annotated["Gamma", Push(Key.X)]


class Gamma:
    alpha: Annotated[Alpha, Push(Key.USER)]
