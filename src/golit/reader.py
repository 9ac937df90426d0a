"""
``golit.reader``: read values to export
=======================================

Values can be read from python expressions (:func:`load_text`) or from
`MessagePack <https://msgpack.org/>`_ documents (:func:`load_msgpack`).

The text format is a small subset of python:

+ constants: ``None``/``nil``, ``True``, ``False``, numbers, ``nan``,
  ``inf``, strings and bytes,
+ lists (``[]interface {}``) and tuples (``[N]interface {}``),
+ conversions to a primitive type: ``int8(5)``, ``float32(1.5)``...
+ ``typed(<go type>, <value>)`` to build a value of any type.

>>> load_text('typed("[][]int", [None, [1, 2]])').type
[][]int

"""
from __future__ import annotations

import ast
import math
import types as pytypes
import typing
import warnings
from typing import Any, Final, Mapping

from structlog import get_logger

from golit import reflect, types, utils
from golit.types import GoType, Kind, Value

__all__ = ("load_text", "load_msgpack")

logger = get_logger()

FILENAME: Final = "<golit>"

CONVERTIBLE_KINDS: Final = frozenset(
    (*types.INT_BOUNDS, *types.FLOAT_KINDS, *types.COMPLEX_KINDS)
) | {Kind.BOOL, Kind.STRING}

CONSTANT_TYPES: Final = (
    pytypes.NoneType,
    bool,
    int,
    float,
    complex,
    str,
    bytes,
)


def load_text(
    source: str, scope: Mapping[str, GoType] | None = None
) -> Value:
    """Read a value from a python expression.

    Args:
      source: the expression
      scope: extra type names that can be used in ``typed(...)``

    Raises:
      SyntaxError: if the expression cannot be converted to a value.
    """
    expression = ast.parse(source, filename=FILENAME, mode="eval")
    reflector = reflect.Reflector()

    def error(
        node: ast.AST, message: str = "Malformed node"
    ) -> typing.NoReturn:
        utils.syntax_error(message, FILENAME, node, content=source)

    def convert(node: ast.AST, t: GoType, obj: Any) -> Value:
        try:
            return reflector.convert(t, obj)
        except (TypeError, ValueError, OverflowError) as e:
            error(node, str(e))

    def value_of(node: ast.AST, obj: Any) -> Value:
        try:
            return reflector.value_of(obj)
        except OverflowError as e:
            error(node, str(e))

    def literal(node: ast.expr) -> Any:
        """Python value for the argument of a conversion"""
        match node:
            case ast.Constant(value) if type(value) in CONSTANT_TYPES:
                return value
            case ast.UnaryOp(ast.USub(), ast.Constant(value)) if type(
                value
            ) in (int, float, complex):
                return -value
            case ast.Name("nil"):
                return None
            case ast.Name("nan"):
                return math.nan
            case ast.Name("inf"):
                return math.inf
            case ast.UnaryOp(ast.USub(), ast.Name("inf")):
                return -math.inf
            case ast.List(elts):
                return [literal(e) for e in elts]
            case ast.Tuple(elts):
                return tuple(literal(e) for e in elts)
        return reduce(node)

    def reduce(node: ast.expr) -> Value:
        match node:
            case ast.Constant(value) if type(value) in CONSTANT_TYPES:
                return value_of(node, value)
            case ast.UnaryOp(
                ast.USub() | ast.UAdd() as op, ast.Constant(value)
            ) if type(value) in (int, float, complex):
                return value_of(
                    node, -value if isinstance(op, ast.USub) else value
                )
            case ast.Name("nil"):
                return types.NIL
            case ast.Name("nan"):
                return Value(types.FLOAT64, math.nan)
            case ast.Name("inf"):
                return Value(types.FLOAT64, math.inf)
            case ast.UnaryOp(ast.USub(), ast.Name("inf")):
                return Value(types.FLOAT64, -math.inf)
            case ast.List(elts):
                return Value(reflect.ANY_SLICE, [reduce(e) for e in elts])
            case ast.Tuple(elts):
                return Value(
                    types.array_of(len(elts), types.ANY),
                    [reduce(e) for e in elts],
                )
            case ast.Call(
                ast.Name("typed"), [ast.Constant(str(type_expr)), arg], []
            ):
                try:
                    t = types.parse_type(type_expr, scope)
                except ValueError as e:
                    error(node, str(e))
                return convert(node, t, literal(arg))
            case ast.Call(ast.Name(name), [arg], []) if (
                name in types.BUILTINS
                and types.BUILTINS[name].kind in CONVERTIBLE_KINDS
            ):
                return convert(node, types.BUILTINS[name], literal(arg))
        error(
            node,
            f"Don't know how to read: {utils.cram(ast.dump(node), 60)}",
        )

    res = reduce(expression.body)
    logger.debug("read text value", type=res.type_name)
    return res


def load_msgpack(data: bytes) -> Value:
    """Read a value from a msgpack document.

    Arrays are read as ``[]interface {}``, binary strings as ``[]uint8``. Maps
    and extension types are kept as opaque values (they cannot be exported).
    """
    try:
        import msgpack
    except ModuleNotFoundError:
        warnings.warn(
            "Reading msgpack documents needs the msgpack package: run "
            "``pip install golit[msgpack]``"
        )
        raise

    obj = msgpack.unpackb(data, raw=False, strict_map_key=False)
    res = reflect.value_of(obj)
    logger.debug("read msgpack value", type=res.type_name)
    return res
