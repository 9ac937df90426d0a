"""Encoders for the go primitives"""
from __future__ import annotations

from typing import Final

from golit import types, utils
from golit.types import GoType, Kind, Value

from .base import Encoder

NUMBER_KINDS: Final = frozenset(
    (
        Kind.INT,
        Kind.INT8,
        Kind.INT16,
        Kind.INT32,
        Kind.INT64,
        Kind.UINT,
        Kind.UINT8,
        Kind.UINT16,
        Kind.UINT32,
        Kind.UINT64,
        Kind.FLOAT32,
        Kind.FLOAT64,
    )
)

BYTES: Final = types.slice_of(types.UINT8)


class BoolEncoder(Encoder):
    def supports(self, value: Value) -> bool:
        return value.type == types.BOOL

    def render(self, value: Value) -> str:
        return "true" if value.data else "false"


class NilEncoder(Encoder):
    "The nil interface (not nil slices or nil pointers)"

    def supports(self, value: Value) -> bool:
        return value.type is None

    def render(self, value: Value) -> str:
        return "nil"


class NumberEncoder(Encoder):
    """Integers and floats.

    If *explicit_type* is set the values are wrapped in a conversion so the
    literal keeps its type when assigned to an ``interface{}``
    (e.g.: ``uint8(5)``).
    """

    explicit_type: bool

    def __init__(self, explicit_type: bool = True) -> None:
        self.explicit_type = explicit_type

    def supports(self, value: Value) -> bool:
        match value.type:
            case GoType(kind=kind, pkg_path="") if kind in NUMBER_KINDS:
                return True
        return False

    def render(self, value: Value) -> str:
        assert value.type is not None
        kind = value.type.kind
        match kind:
            case Kind.FLOAT32:
                text = utils.format_float(value.data, bits=32)
            case Kind.FLOAT64:
                text = utils.format_float(value.data, bits=64)
            case _:
                text = str(value.data)
        if self.explicit_type:
            return f"{kind.value}({text})"
        return text


class StringEncoder(Encoder):
    def supports(self, value: Value) -> bool:
        return value.type == types.STRING

    def render(self, value: Value) -> str:
        return utils.quote(value.data)


def _decode(value: Value) -> str | None:
    """The content of a ``[]byte`` if it is valid utf8."""
    try:
        return bytes(b.data for b in value.data or ()).decode("utf8")
    except UnicodeDecodeError:
        return None


class BytesEncoder(Encoder):
    """``[]byte`` that contain valid utf8 are printed as a string conversion.

    Other byte slices are handled as normal slices.
    """

    def supports(self, value: Value) -> bool:
        return value.type == BYTES and _decode(value) is not None

    def render(self, value: Value) -> str:
        text = _decode(value)
        assert text is not None
        return f"[]byte({utils.quote(text)})"
