"""Exceptions raised while exporting values."""
from __future__ import annotations


class ExportError(Exception):
    "Base class for all the errors raised when a value cannot be exported."


class UnsupportedTypeError(ExportError, TypeError):
    """No encoder knows how to handle values of this type."""

    type_name: str

    def __init__(self, type_name: str) -> None:
        super().__init__(f"type {type_name} is not supported")
        self.type_name = type_name


class InfiniteLoopError(ExportError, RecursionError):
    """A value contains itself."""

    def __init__(self) -> None:
        super().__init__("unexpected infinite loop")


class IntegerOverflowError(ExportError, OverflowError):
    """An integer doesn't fit in the go type it is converted to."""

    def __init__(self, value: int, type_name: str) -> None:
        super().__init__(f"{value} overflows {type_name}")


class NestingTooDeepError(ExportError, RecursionError):
    """A value is nested deeper than the interpreter's recursion limit."""

    def __init__(self) -> None:
        super().__init__("value nested too deeply")


class CompositeElementError(ExportError):
    """One of the elements of a slice or an array could not be exported.

    The wrapped error is available as ``__cause__``; errors raised in nested
    containers get chained in the message::

        cannot export ([][]int)[2]: cannot export ([]int)[0]: ...
    """

    container: str
    index: int

    def __init__(self, container: str, index: int, cause: ExportError) -> None:
        super().__init__(f"cannot export ({container})[{index}]: {cause}")
        self.container = container
        self.index = index
        self.__cause__ = cause


class ExportPanic(RuntimeError):
    """Raised by the ``must_`` variants of the export functions.

    This is not an :class:`ExportError`: it is not meant to be caught.
    """
