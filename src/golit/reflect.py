"""
``golit.reflect``: from python values to go values
==================================================

:func:`value_of` maps python values onto the go type they naturally
correspond to:

+ :const:`None` is the nil interface
+ :class:`bool`, :class:`int`, :class:`float`, :class:`complex` and
  :class:`str` are ``bool``, ``int``, ``float64``, ``complex128`` and
  ``string``
+ :class:`bytes` and :class:`bytearray` are ``[]uint8``
+ :class:`list` is ``[]interface {}`` and :class:`tuple` is
  ``[N]interface {}``

Values of any other type (including subclasses of the types above) are kept
as opaque values of a named type. They can be carried around but won't be
exported.

:func:`convert` and :func:`typed` build values of an explicit type::

    >>> typed("[]int8", [1, 2]).type
    []int8

"""
from __future__ import annotations

import typing
from typing import Any, Final, Mapping

from golit import errors, types
from golit.types import GoType, Kind, Value
from golit.utils import to_float32

__all__ = ("value_of", "type_of", "convert", "typed")

ANY_SLICE = types.slice_of(types.ANY)


def _foreign_type(ty: type) -> GoType:
    return types.named(ty.__qualname__, types.struct_of(), ty.__module__)


class Reflector:
    """Converts python values to :class:`~golit.types.Value`.

    Slices are memoized on the ``id`` of the python sequence they were built
    from so self-referential lists turn into self-referential slices.
    """

    memo: dict[tuple[int, GoType], Value]

    def __init__(self) -> None:
        self.memo = {}

    def value_of(self, obj: Any) -> Value:
        ty = type(obj)
        # We do exact type comparisons instead of calls to `isinstance` to
        # avoid running into problems with inheritance
        if ty is Value:
            return typing.cast(Value, obj)
        if obj is None:
            return types.NIL
        if ty is bool:
            return Value(types.BOOL, obj)
        if ty is int:
            return self.convert(types.INT, obj)
        if ty is float:
            return Value(types.FLOAT64, obj)
        if ty is complex:
            return Value(types.COMPLEX128, obj)
        if ty is str:
            return Value(types.STRING, obj)
        if ty in (bytes, bytearray):
            return self.convert(types.slice_of(types.UINT8), obj)
        if ty is list:
            return self.convert(ANY_SLICE, obj)
        if ty is tuple:
            return self.convert(types.array_of(len(obj), types.ANY), obj)
        return Value(_foreign_type(ty), obj)

    def _interface(self, t: GoType, obj: Any) -> Value:
        v = self.value_of(obj)
        if t.methods and not (v.is_nil or (v.type and v.type.is_named)):
            raise TypeError(f"{v.type_name} does not implement {t}")
        return v

    def _items(self, t: GoType, obj: Any) -> list[Value]:
        if type(obj) not in (list, tuple, bytes, bytearray):
            raise TypeError(
                f"Cannot convert {type(obj).__name__!r} to {t}: expected a "
                "sequence"
            )
        assert t.elem is not None
        return [self.convert(t.elem, x) for x in obj]

    def convert(self, t: GoType, obj: Any) -> Value:
        if t.kind == Kind.INTERFACE:
            return self._interface(t, obj)
        if type(obj) is Value:
            if obj.type != t:
                raise TypeError(f"Cannot use a {obj.type_name} as {t}")
            return typing.cast(Value, obj)
        kind = t.kind
        ty = type(obj)
        if kind == Kind.BOOL:
            if ty is not bool:
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            return Value(t, obj)
        if kind in types.INT_BOUNDS:
            if ty is not int:
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            lo, hi = types.INT_BOUNDS[kind]
            if not lo <= obj <= hi:
                raise errors.IntegerOverflowError(obj, str(t))
            return Value(t, obj)
        if kind in types.FLOAT_KINDS:
            if ty not in (int, float):
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            f = float(obj)
            return Value(t, to_float32(f) if kind == Kind.FLOAT32 else f)
        if kind in types.COMPLEX_KINDS:
            if ty not in (int, float, complex):
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            c = complex(obj)
            if kind == Kind.COMPLEX64:
                c = complex(to_float32(c.real), to_float32(c.imag))
            return Value(t, c)
        if kind == Kind.STRING:
            if ty is not str:
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            return Value(t, obj)
        if kind == Kind.SLICE:
            if obj is None:
                return Value(t, None)
            key = (id(obj), t)
            memoized = self.memo.get(key)
            if memoized is not None:
                return memoized
            res = self.memo[key] = Value(t, [])
            res.data.extend(self._items(t, obj))
            return res
        if kind == Kind.ARRAY:
            assert t.length is not None and t.elem is not None
            items = self._items(t, obj)
            if len(items) > t.length:
                raise ValueError(
                    f"Index {t.length} out of bounds for {t} (got "
                    f"{len(items)} values)"
                )
            items.extend(
                types.zero(t.elem) for _ in range(t.length - len(items))
            )
            return Value(t, items)
        if kind == Kind.STRUCT:
            if ty is not tuple or len(obj) != len(t.fields):
                raise TypeError(f"Cannot convert {obj!r} to {t}")
            return Value(
                t,
                tuple(
                    self.convert(ft, x)
                    for (_, ft), x in zip(t.fields, obj, strict=True)
                ),
            )
        if kind == Kind.POINTER:
            assert t.elem is not None
            if obj is None:
                return Value(t, None)
            return Value(t, self.convert(t.elem, obj))
        # maps and funcs are opaque
        assert kind in (Kind.MAP, Kind.FUNC), kind
        return Value(t, obj)


def value_of(obj: Any) -> Value:
    """Convert a python value to a go value.

    >>> value_of([1, "a"]).type
    []interface {}
    >>> value_of((1.5,)).type
    [1]interface {}
    """
    return Reflector().value_of(obj)


_BUILTIN_TYPES: Final[Mapping[type, GoType]] = {
    bool: types.BOOL,
    int: types.INT,
    float: types.FLOAT64,
    complex: types.COMPLEX128,
    str: types.STRING,
    bytes: types.slice_of(types.UINT8),
    bytearray: types.slice_of(types.UINT8),
    list: ANY_SLICE,
}


def type_of(obj: Any) -> GoType | None:
    """The type :func:`value_of` gives to *obj* (``None`` for nil).

    Unlike :func:`value_of` this doesn't look at the content of *obj*:

    >>> type_of([2**64, [[]]])
    []interface {}
    """
    ty = type(obj)
    if ty is Value:
        return typing.cast(Value, obj).type
    if obj is None:
        return None
    if ty is tuple:
        return types.array_of(len(obj), types.ANY)
    t = _BUILTIN_TYPES.get(ty)
    return _foreign_type(ty) if t is None else t


def convert(t: GoType, obj: Any) -> Value:
    """Convert *obj* to a value of type *t*

    Integers are range checked, ``float32`` are rounded to single precision
    and arrays are padded with zero values.
    """
    return Reflector().convert(t, obj)


def typed(
    t: GoType | str, obj: Any, scope: Mapping[str, GoType] | None = None
) -> Value:
    """Like :func:`convert` but *t* can also be a go type expression."""
    if isinstance(t, str):
        t = types.parse_type(t, scope)
    return convert(t, obj)
