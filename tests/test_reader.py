from __future__ import annotations

import math
import sys

import pytest

from golit import reader, types
from golit.exporters import export


@pytest.mark.parametrize(
    ("source", "expected"),
    (
        ("None", "nil"),
        ("nil", "nil"),
        ("True", "true"),
        ("1", "int(1)"),
        ("-1", "int(-1)"),
        ("+1.5", "float64(1.5)"),
        ("nan", "float64(NaN)"),
        ("inf", "float64(+Inf)"),
        ("-inf", "float64(-Inf)"),
        ('"a"', '"a"'),
        ('b"ab"', '[]byte("ab")'),
        ("[1, [None]]", "[]interface{}{int(1), []interface{}{nil}}"),
        ("(1,)", "[1]interface{}{int(1)}"),
        ("int8(5)", "int8(5)"),
        ("int8(-5)", "int8(-5)"),
        ("byte(1)", "uint8(1)"),
        ("float32(0.1)", "float32(0.1)"),
        ("float64(-inf)", "float64(-Inf)"),
        ('typed("[]int", [1, 2])', "[]int{int(1), int(2)}"),
        ('typed("[2]int", [1])', "[2]int{int(1), int(0)}"),
        (
            'typed("[][]int", [nil, []])',
            "[][]int{([]int)(nil), make([]int, 0)}",
        ),
        ('typed("[]any", [int8(1), "a"])', '[]interface{}{int8(1), "a"}'),
        ("typed('[]byte', b'x')", '[]byte("x")'),
    ),
)
def test_load_text(source, expected):
    assert export(reader.load_text(source)) == expected


def test_load_text_values():
    assert reader.load_text("None") is types.NIL
    assert math.isnan(reader.load_text("nan").data)
    v = reader.load_text("uintptr(1)")
    assert v.type == types.UINTPTR
    v = reader.load_text("complex64(1)")
    assert v.type == types.COMPLEX64 and v.data == 1 + 0j


def test_load_text_scope():
    my_int = types.named("myInt", types.INT)
    v = reader.load_text('typed("[]myInt", [1])', {"myInt": my_int})
    assert v.data[0].type == my_int


@pytest.mark.parametrize(
    ("source", "message"),
    (
        ("foo", "Don't know how to read"),
        ("2**64", "Don't know how to read"),
        ("any(1)", "Don't know how to read"),
        ("int8(x=1)", "Don't know how to read"),
        ("{1: 2}", "Don't know how to read"),
        ("99999999999999999999", "overflows int"),
        ("int8(300)", "300 overflows int8"),
        ("int8(1.5)", "Cannot convert"),
        ('typed("[]foo", [])', "Unknown type 'foo'"),
        ('typed("[]int", ["a"])', "Cannot convert"),
        ('typed("[1]int", [1, 2])', "out of bounds"),
    ),
)
def test_load_text_errors(source, message):
    with pytest.raises(SyntaxError, match=message) as exc_info:
        reader.load_text(source)
    err = exc_info.value
    assert err.filename == reader.FILENAME
    assert err.lineno == 1
    assert err.text == source


def test_error_position():
    with pytest.raises(SyntaxError) as exc_info:
        reader.load_text("[1,\n foo]")
    err = exc_info.value
    assert err.lineno == 2
    assert err.offset == 2
    assert err.text == " foo]"


def test_invalid_python():
    with pytest.raises(SyntaxError):
        reader.load_text("[1,")


def test_load_msgpack():
    msgpack = pytest.importorskip("msgpack")
    data = msgpack.packb([1, "a", b"b", None, True, 1.5, [2]])
    assert export(reader.load_msgpack(data)) == (
        '[]interface{}{int(1), "a", []byte("b"), nil, true, float64(1.5), '
        "[]interface{}{int(2)}}"
    )


def test_load_msgpack_overflow():
    msgpack = pytest.importorskip("msgpack")
    with pytest.raises(OverflowError, match="overflows int"):
        reader.load_msgpack(msgpack.packb([2**64 - 1]))


def test_load_msgpack_maps():
    msgpack = pytest.importorskip("msgpack")
    v = reader.load_msgpack(msgpack.packb({1: "a"}))
    assert v.type is not None and v.type.is_named
    assert v.data == {1: "a"}


def test_msgpack_not_installed(monkeypatch):
    monkeypatch.setitem(sys.modules, "msgpack", None)
    with pytest.warns(UserWarning, match=r"golit\[msgpack\]"), pytest.raises(
        ModuleNotFoundError
    ):
        reader.load_msgpack(b"\x90")
