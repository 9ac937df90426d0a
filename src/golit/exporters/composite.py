"""Encoder for slices and arrays.

Multi-dimensional values are printed with their full type on every level so
they can be assigned to an ``interface{}``::

    [][2]int{[2]int{int(1), int(2)}}

"""
from __future__ import annotations

from typing import Final

from golit import errors, types
from golit.types import GoType, Kind, Value

from .base import Encoder

ANY_NAME: Final = "interface{}"


def is_container(t: GoType | None) -> bool:
    "Is *t* a slice or an array (that isn't a named type)"
    return (
        t is not None
        and not t.is_named
        and t.kind in (Kind.SLICE, Kind.ARRAY)
    )


def strip(t: GoType) -> tuple[str, GoType]:
    """Peel all the slice/array layers of *t*.

    >>> strip(types.parse_type("[][2][]int"))
    ('[][2][]', int)
    """
    prefix = ""
    while is_container(t):
        assert t.elem is not None
        if t.kind == Kind.ARRAY:
            prefix += f"[{t.length}]"
        else:
            prefix += "[]"
        t = t.elem
    return prefix, t


class CompositeEncoder(Encoder):
    """Slices and arrays whose elements can be rendered by *encoder*.

    *encoder* is the encoder the elements are rendered with; it is usually the
    chain containing this encoder and gets set once the chain is built.
    """

    encoder: Encoder | None
    any_name: str

    def __init__(
        self, encoder: Encoder | None = None, any_name: str = ANY_NAME
    ) -> None:
        self.encoder = encoder
        self.any_name = any_name

    def _leaf_name(self, leaf: GoType) -> str:
        if leaf.kind == Kind.INTERFACE:
            return self.any_name
        return leaf.kind.value

    def supports(self, value: Value) -> bool:
        if not is_container(value.type):
            return False
        assert value.type is not None and self.encoder is not None
        _, leaf = strip(value.type)
        if leaf.is_named:
            return False
        # The zero value of an interface is nil whether or not it has methods
        # so we have to check for methods before we look at the zero value.
        if leaf.kind == Kind.INTERFACE and leaf.methods:
            return False
        return self.encoder.supports(types.zero(leaf))

    def render(self, value: Value) -> str:
        assert value.type is not None and self.encoder is not None
        prefix, leaf = strip(value.type)
        ty = prefix + self._leaf_name(leaf)
        if value.type.kind == Kind.SLICE:
            if value.data is None:
                return f"({ty})(nil)"
            if not value.data:
                return f"make({ty}, 0)"
        parts = []
        for idx, elt in enumerate(value.data):
            try:
                parts.append(self.encoder.render(elt))
            except errors.ExportError as e:
                raise errors.CompositeElementError(ty, idx, e) from e
        return ty + "{" + ", ".join(parts) + "}"
