"""
``golit.types``: Go types and values
====================================

Go values are modelled explicitly: every :class:`Value` carries the
:class:`GoType` it was built with and we never guess a type from the runtime
structure of a python object (see :mod:`golit.reflect` for the conversion from
python values).

Types can be called to build values::

    >>> slice_of(INT)([1, 2, 3]).data[2]
    Value(type=int, data=3)
    >>> str(parse_type("[][2][]interface{}"))
    '[][2][]interface {}'

"""
from __future__ import annotations

import dataclasses
import enum
import re
from typing import Any, Final, Iterator, Mapping

__all__ = (
    "Kind",
    "GoType",
    "Value",
    "NIL",
    "zero",
    "slice_of",
    "array_of",
    "pointer_to",
    "map_of",
    "interface_of",
    "struct_of",
    "named",
    "parse_type",
)


class Kind(enum.Enum):
    """The underlying kind of a type, spelled the way ``reflect`` does."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    ARRAY = "array"
    SLICE = "slice"
    POINTER = "ptr"
    MAP = "map"
    FUNC = "func"
    INTERFACE = "interface"
    STRUCT = "struct"


# kind -> (min, max)
INT_BOUNDS: Final[Mapping[Kind, tuple[int, int]]] = {
    Kind.INT: (-(2**63), 2**63 - 1),
    Kind.INT8: (-(2**7), 2**7 - 1),
    Kind.INT16: (-(2**15), 2**15 - 1),
    Kind.INT32: (-(2**31), 2**31 - 1),
    Kind.INT64: (-(2**63), 2**63 - 1),
    Kind.UINT: (0, 2**64 - 1),
    Kind.UINT8: (0, 2**8 - 1),
    Kind.UINT16: (0, 2**16 - 1),
    Kind.UINT32: (0, 2**32 - 1),
    Kind.UINT64: (0, 2**64 - 1),
    Kind.UINTPTR: (0, 2**64 - 1),
}

FLOAT_KINDS: Final = frozenset((Kind.FLOAT32, Kind.FLOAT64))
COMPLEX_KINDS: Final = frozenset((Kind.COMPLEX64, Kind.COMPLEX128))
# Kinds whose zero value is nil
NILLABLE_KINDS: Final = frozenset(
    (Kind.SLICE, Kind.POINTER, Kind.MAP, Kind.FUNC, Kind.INTERFACE)
)


def _package_name(pkg_path: str) -> str:
    return re.split(r"[./]", pkg_path)[-1]


@dataclasses.dataclass(frozen=True, slots=True)
class GoType:
    """A go type.

    Types are compared structurally; two named types are identical if they
    have the same name and package path.
    """

    kind: Kind
    elem: GoType | None = None
    length: int | None = None
    key: GoType | None = None
    name: str = ""
    pkg_path: str = ""
    methods: tuple[str, ...] = ()
    fields: tuple[tuple[str, GoType], ...] = ()

    @property
    def is_named(self) -> bool:
        "Is this a user defined type (as opposed to a predeclared one)"
        return self.pkg_path != ""

    def __str__(self) -> str:
        # Slices, arrays and pointers are peeled in a loop: they can be nested
        # deeper than the recursion limit.
        prefix: list[str] = []
        t = self
        while not t.is_named and t.elem is not None and t.kind != Kind.MAP:
            match t.kind:
                case Kind.SLICE:
                    prefix.append("[]")
                case Kind.ARRAY:
                    prefix.append(f"[{t.length}]")
                case Kind.POINTER:
                    prefix.append("*")
            t = t.elem
        return "".join(prefix) + t._leaf_str()

    def _leaf_str(self) -> str:
        if self.is_named:
            return f"{_package_name(self.pkg_path)}.{self.name}"
        match self.kind:
            case Kind.MAP:
                return f"map[{self.key}]{self.elem}"
            case Kind.FUNC:
                return "func()"
            case Kind.INTERFACE:
                if not self.methods:
                    return "interface {}"
                return "interface { " + "; ".join(self.methods) + " }"
            case Kind.STRUCT:
                if not self.fields:
                    return "struct {}"
                body = "; ".join(f"{n} {t}" for n, t in self.fields)
                return "struct { " + body + " }"
        return self.kind.value

    def __repr__(self) -> str:
        return str(self)

    def __call__(self, value: Any = dataclasses.MISSING) -> Value:
        """Build a value of this type (the equivalent of ``T(value)``)."""
        from golit import reflect

        if value is dataclasses.MISSING:
            return zero(self)
        return reflect.convert(self, value)


@dataclasses.dataclass(slots=True, eq=False)
class Value:
    """A go value.

    A value with no type is the ``nil`` interface. Slices and arrays hold a
    mutable list of :class:`Value` (``None`` for a nil slice) so they can be
    made to reference themselves.
    """

    type: GoType | None
    data: Any = None

    @property
    def is_nil(self) -> bool:
        if self.type is None:
            return True
        return self.type.kind in NILLABLE_KINDS and self.data is None

    @property
    def type_name(self) -> str:
        "The name of the type as printed by ``%T``"
        return "<nil>" if self.type is None else str(self.type)


#: The nil interface
NIL: Final = Value(None)

BOOL: Final = GoType(Kind.BOOL)
INT: Final = GoType(Kind.INT)
INT8: Final = GoType(Kind.INT8)
INT16: Final = GoType(Kind.INT16)
INT32: Final = GoType(Kind.INT32)
INT64: Final = GoType(Kind.INT64)
UINT: Final = GoType(Kind.UINT)
UINT8: Final = GoType(Kind.UINT8)
UINT16: Final = GoType(Kind.UINT16)
UINT32: Final = GoType(Kind.UINT32)
UINT64: Final = GoType(Kind.UINT64)
UINTPTR: Final = GoType(Kind.UINTPTR)
FLOAT32: Final = GoType(Kind.FLOAT32)
FLOAT64: Final = GoType(Kind.FLOAT64)
COMPLEX64: Final = GoType(Kind.COMPLEX64)
COMPLEX128: Final = GoType(Kind.COMPLEX128)
STRING: Final = GoType(Kind.STRING)
FUNC: Final = GoType(Kind.FUNC)
#: The empty interface
ANY: Final = GoType(Kind.INTERFACE)
# Aliases are the same types
BYTE: Final = UINT8
RUNE: Final = INT32

BUILTINS: Final[Mapping[str, GoType]] = {
    **{
        t.kind.value: t
        for t in (
            BOOL,
            INT,
            INT8,
            INT16,
            INT32,
            INT64,
            UINT,
            UINT8,
            UINT16,
            UINT32,
            UINT64,
            UINTPTR,
            FLOAT32,
            FLOAT64,
            COMPLEX64,
            COMPLEX128,
            STRING,
        )
    },
    "byte": BYTE,
    "rune": RUNE,
    "any": ANY,
}


def slice_of(elem: GoType) -> GoType:
    return GoType(Kind.SLICE, elem=elem)


def array_of(length: int, elem: GoType) -> GoType:
    if length < 0:
        raise ValueError(f"Invalid array length: {length}")
    return GoType(Kind.ARRAY, elem=elem, length=length)


def pointer_to(elem: GoType) -> GoType:
    return GoType(Kind.POINTER, elem=elem)


def map_of(key: GoType, elem: GoType) -> GoType:
    return GoType(Kind.MAP, key=key, elem=elem)


def interface_of(*methods: str) -> GoType:
    """An interface type requiring *methods* (e.g.: ``"Do()"``)"""
    return GoType(Kind.INTERFACE, methods=tuple(methods))


def struct_of(*fields: tuple[str, GoType]) -> GoType:
    return GoType(Kind.STRUCT, fields=tuple(fields))


def named(name: str, underlying: GoType, pkg_path: str = "main") -> GoType:
    """Declare a new type (``type name underlying``) in *pkg_path*."""
    if not pkg_path:
        raise ValueError("Named types need a package path")
    return dataclasses.replace(underlying, name=name, pkg_path=pkg_path)


def zero(t: GoType) -> Value:
    """The zero value of *t*.

    Note that the zero value of an interface type is the nil interface, not a
    value of type *t*.
    """
    kind = t.kind
    if kind == Kind.INTERFACE:
        return NIL
    if kind == Kind.BOOL:
        return Value(t, False)
    if kind in INT_BOUNDS:
        return Value(t, 0)
    if kind in FLOAT_KINDS:
        return Value(t, 0.0)
    if kind in COMPLEX_KINDS:
        return Value(t, 0j)
    if kind == Kind.STRING:
        return Value(t, "")
    if kind == Kind.ARRAY:
        assert t.elem is not None and t.length is not None
        return Value(t, [zero(t.elem) for _ in range(t.length)])
    if kind == Kind.STRUCT:
        return Value(t, tuple(zero(ft) for _, ft in t.fields))
    assert kind in NILLABLE_KINDS, kind
    return Value(t, None)


# Parsing of go type expressions

_TOKEN_RE: Final = re.compile(
    r"\s*(?:(?P<num>[0-9]+)|(?P<ident>[A-Za-z_][A-Za-z_0-9]*)|(?P<punct>[][{}()*;]))"
)


def _tokenize(text: str) -> Iterator[str]:
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ValueError(f"Invalid go type {text!r} at position {pos}")
        pos = m.end()
        yield m.group(m.lastgroup or 0)


def parse_type(text: str, scope: Mapping[str, GoType] | None = None) -> GoType:
    """Parse a go type expression

    >>> parse_type("[2][]int")
    [2][]int
    >>> parse_type("interface { Do() }")
    interface { Do() }

    Args:
      text: the type expression
      scope: extra type names (e.g. named types) that can be referenced.
    """
    tokens = list(_tokenize(text))
    pos = 0

    def peek() -> str | None:
        return tokens[pos] if pos < len(tokens) else None

    def advance() -> str:
        nonlocal pos
        tok = peek()
        if tok is None:
            raise ValueError(f"Unexpected end of go type {text!r}")
        pos += 1
        return tok

    def expect(expected: str) -> None:
        tok = advance()
        if tok != expected:
            raise ValueError(
                f"Expected {expected!r} but got {tok!r} in go type {text!r}"
            )

    def parse_methods() -> Iterator[str]:
        while peek() != "}":
            method = advance()
            expect("(")
            expect(")")
            yield f"{method}()"
            if peek() == ";":
                advance()

    def parse_fields() -> Iterator[tuple[str, GoType]]:
        while peek() != "}":
            field = advance()
            yield field, parse()
            if peek() == ";":
                advance()

    def parse() -> GoType:
        tok = advance()
        match tok:
            case "[":
                if peek() == "]":
                    advance()
                    return slice_of(parse())
                size = advance()
                if not size.isdigit():
                    raise ValueError(
                        f"Invalid array length {size!r} in go type {text!r}"
                    )
                expect("]")
                return array_of(int(size), parse())
            case "*":
                return pointer_to(parse())
            case "map":
                expect("[")
                key = parse()
                expect("]")
                return map_of(key, parse())
            case "func":
                expect("(")
                expect(")")
                return FUNC
            case "interface":
                expect("{")
                methods = tuple(parse_methods())
                expect("}")
                return interface_of(*methods)
            case "struct":
                expect("{")
                fields = tuple(parse_fields())
                expect("}")
                return struct_of(*fields)
        if scope is not None and tok in scope:
            return scope[tok]
        if tok in BUILTINS:
            return BUILTINS[tok]
        raise ValueError(f"Unknown type {tok!r} in go type {text!r}")

    res = parse()
    if pos != len(tokens):
        raise ValueError(f"Trailing characters in go type {text!r}")
    return res
