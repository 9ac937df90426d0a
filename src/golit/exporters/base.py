from __future__ import annotations

import abc
from typing import Callable

from golit import errors, utils
from golit.types import Value


class Encoder(abc.ABC):
    """Turns values into go code.

    Encoders are chained together: the first encoder that :meth:`supports` a
    value is the one that will :meth:`render` it.
    """

    @abc.abstractmethod
    def supports(self, value: Value) -> bool:  # pragma: no cover
        ...

    @abc.abstractmethod
    def render(self, value: Value) -> str:  # pragma: no cover
        ...


class Chain(Encoder):
    "Delegate to the first encoder that supports a given value."

    encoders: tuple[Encoder, ...]

    def __init__(self, *encoders: Encoder) -> None:
        self.encoders = encoders

    def supports(self, value: Value) -> bool:
        return any(e.supports(value) for e in self.encoders)

    def render(self, value: Value) -> str:
        for encoder in self.encoders:
            if encoder.supports(value):
                return encoder.render(value)
        raise errors.UnsupportedTypeError(value.type_name)


class Stack:
    """The values that are currently being rendered.

    Values are compared with :func:`~golit.utils.deep_equal`; pushing a value
    that is already on the stack means we would never terminate.
    """

    values: list[Value]

    def __init__(self) -> None:
        self.values = []

    def push(self, value: Value) -> None:
        for v in self.values:
            if utils.deep_equal(v, value):
                raise errors.InfiniteLoopError()
        self.values.append(value)

    def pop(self) -> None:
        self.values.pop()

    def __len__(self) -> int:
        return len(self.values)


class CycleGuard(Encoder):
    """Refuse to render values that contain themselves."""

    stack: Stack
    next: Encoder

    def __init__(self, next: Encoder) -> None:
        self.stack = Stack()
        self.next = next

    def supports(self, value: Value) -> bool:
        return self.next.supports(value)

    def render(self, value: Value) -> str:
        self.stack.push(value)
        try:
            return self.next.render(value)
        finally:
            self.stack.pop()


class Disposable(Encoder):
    """Build a new encoder for every call.

    Encoders like :class:`CycleGuard` are stateful, this makes sure that two
    calls never share their state.
    """

    factory: Callable[[], Encoder]

    def __init__(self, factory: Callable[[], Encoder]) -> None:
        self.factory = factory

    def supports(self, value: Value) -> bool:
        return self.factory().supports(value)

    def render(self, value: Value) -> str:
        return self.factory().render(value)
