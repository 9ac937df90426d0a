from __future__ import annotations

import ast
import decimal
import linecache
import math
import pydoc
import struct
import typing
from typing import Final

from golit.types import GoType, Kind, Value

cram = pydoc.cram


def to_float32(x: float) -> float:
    "Round *x* to the closest single precision float"
    res: float = struct.unpack("f", struct.pack("f", x))[0]
    return res


def format_float(x: float, bits: int = 64) -> str:
    """Shortest decimal representation of *x* that reads back as *x*

    Like go's ``strconv.FormatFloat(x, 'f', -1, bits)`` this never uses an
    exponent.

    >>> format_float(1e21)
    '1000000000000000000000'
    >>> format_float(to_float32(3.1416), bits=32)
    '3.1416'
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if bits == 32:
        for precision in range(1, 10):
            digits = f"{x:.{precision}g}"
            if to_float32(float(digits)) == x:
                break
    else:
        assert bits == 64, bits
        digits = repr(x)
    return format(decimal.Decimal(digits).normalize(), "f")


_ESCAPES: Final = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _escape(c: str) -> str:
    esc = _ESCAPES.get(c)
    if esc is not None:
        return esc
    cp = ord(c)
    if 0x20 <= cp < 0x7F:
        return c
    if cp < 0x80:
        return f"\\x{cp:02x}"
    if 0xD800 <= cp <= 0xDFFF:
        # Not valid utf8: these get printed byte per byte.
        if 0xDC80 <= cp <= 0xDCFF:
            # byte smuggled in via the `surrogateescape` error handler
            return f"\\x{cp - 0xDC00:02x}"
        return "".join(
            f"\\x{b:02x}" for b in c.encode("utf8", "surrogatepass")
        )
    if cp < 0x10000:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"


def quote(s: str) -> str:
    r"""Quote *s* as an ascii only go string literal (go's ``%+q``)

    >>> print(quote('tab\there "你好"'))
    "tab\there \"\u4f60\u597d\""
    """
    return '"' + "".join(_escape(c) for c in s) + '"'


def deep_equal(x: Value, y: Value) -> bool:
    """Structural equality, with the semantic of go's ``reflect.DeepEqual``

    + values of different types are never equal,
    + a nil slice is not equal to an empty slice,
    + ``NaN`` is not equal to itself,
    + cyclic values are handled.
    """
    # (id, id, type) of the slices and pointers we are already comparing
    visited = set[tuple[int, int, GoType]]()

    def hard(x: Value, y: Value, t: GoType) -> bool | None:
        if x.data is y.data:
            return True
        if x.data is None or y.data is None:
            return False
        key = (id(x.data), id(y.data), t)
        if key in visited:
            return True
        visited.add(key)
        return None

    def eq(x: Value, y: Value) -> bool:
        if x.type is None or y.type is None:
            return x.type is y.type
        if x.type != y.type:
            return False
        t = x.type
        match t.kind:
            case Kind.ARRAY:
                return all(eq(a, b) for a, b in zip(x.data, y.data))
            case Kind.STRUCT if type(x.data) is tuple is type(y.data):
                return all(eq(a, b) for a, b in zip(x.data, y.data))
            case Kind.SLICE:
                if len(x.data or ()) != len(y.data or ()):
                    return False
                short = hard(x, y, t)
                if short is not None:
                    return short
                return all(eq(a, b) for a, b in zip(x.data, y.data))
            case Kind.POINTER:
                short = hard(x, y, t)
                if short is not None:
                    return short
                return eq(x.data, y.data)
            case Kind.FUNC:
                return x.data is None and y.data is None
        # NaN != NaN so we cannot shortcut on identity here
        return bool(x.data == y.data)

    return eq(x, y)


def syntax_error(
    msg: str, filename: str, node: ast.AST, content: str | None = None
) -> typing.NoReturn:
    """Raise a syntax error on a given ast position

    The offending line is read from *content* if it's given, otherwise from
    the file.
    """
    lineno: int = getattr(node, "lineno", 1)
    if content is None:
        line = linecache.getline(filename, lineno)
    else:
        lines = content.splitlines()
        line = lines[lineno - 1] if lineno <= len(lines) else ""
    # https://github.com/python/cpython/blob/3.10/Objects/exceptions.c#L1474
    raise SyntaxError(
        msg,
        (
            filename,
            lineno,
            getattr(node, "col_offset", 0) + 1,
            line,
            getattr(node, "end_lineno", None),
            getattr(node, "end_col_offset", None),
        ),
    )
