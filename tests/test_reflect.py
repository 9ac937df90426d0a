from __future__ import annotations

import pytest

from golit import errors, reflect, types, utils
from golit.types import Value


class MyInt(int):
    pass


@pytest.mark.parametrize(
    ("obj", "ty"),
    (
        (True, types.BOOL),
        (5, types.INT),
        (1.5, types.FLOAT64),
        (1j, types.COMPLEX128),
        ("a", types.STRING),
        (b"ab", types.slice_of(types.UINT8)),
        (bytearray(b"ab"), types.slice_of(types.UINT8)),
        ([1, "a"], types.slice_of(types.ANY)),
        ((1, "a"), types.array_of(2, types.ANY)),
        ((), types.array_of(0, types.ANY)),
    ),
)
def test_value_of(obj, ty):
    assert reflect.value_of(obj).type == ty


def test_value_of_nil():
    assert reflect.value_of(None) is types.NIL


def test_value_of_value():
    v = types.INT8(3)
    assert reflect.value_of(v) is v


def test_value_of_bytes():
    v = reflect.value_of(b"ab")
    assert [(b.type, b.data) for b in v.data] == [
        (types.UINT8, 97),
        (types.UINT8, 98),
    ]


def test_value_of_elements():
    v = reflect.value_of([None, 1, [2]])
    nil, one, inner = v.data
    assert nil is types.NIL
    assert one.type == types.INT
    assert inner.type == types.slice_of(types.ANY)
    assert inner.data[0].data == 2


def test_foreign_types():
    # Subclasses of builtin types are not the builtin types
    v = reflect.value_of(MyInt(5))
    assert v.type is not None and v.type.is_named
    assert v.type_name.endswith(".MyInt")
    assert v.data == 5

    v = reflect.value_of(object())
    assert v.type_name == "builtins.object"


def test_int_overflow():
    reflect.value_of(2**63 - 1)
    with pytest.raises(OverflowError, match="overflows int"):
        reflect.value_of(2**63)


def test_cycles():
    a = [None]
    a[0] = a
    v = reflect.value_of(a)
    assert v.data[0] is v


def test_shared():
    e = []
    v = reflect.value_of([e, e, []])
    assert v.data[0] is v.data[1]
    assert v.data[0] is not v.data[2]


@pytest.mark.parametrize(
    ("ty", "obj", "exc", "message"),
    (
        (types.INT8, 300, OverflowError, "300 overflows int8"),
        (types.UINT, -1, OverflowError, "-1 overflows uint"),
        (types.INT8, "x", TypeError, "Cannot convert"),
        (types.INT, True, TypeError, "Cannot convert"),
        (types.INT, 1.0, TypeError, "Cannot convert"),
        (types.BOOL, 1, TypeError, "Cannot convert"),
        (types.STRING, b"", TypeError, "Cannot convert"),
        (types.FLOAT64, "1", TypeError, "Cannot convert"),
        (types.INT, types.INT8(1), TypeError, "Cannot use a int8 as int"),
        (types.slice_of(types.INT), 5, TypeError, "expected a sequence"),
        (types.array_of(1, types.INT), [1, 2], ValueError, "out of bounds"),
        (
            types.slice_of(types.interface_of("Do()")),
            [1],
            TypeError,
            "int does not implement",
        ),
        (
            types.struct_of(("A", types.INT)),
            (1, 2),
            TypeError,
            "Cannot convert",
        ),
    ),
)
def test_convert_errors(ty, obj, exc, message):
    with pytest.raises(exc, match=message):
        reflect.convert(ty, obj)


def test_convert_numbers():
    assert types.UINT64(2**64 - 1).data == 2**64 - 1
    f = types.FLOAT64(1)
    assert type(f.data) is float
    assert types.FLOAT32(0.1).data == utils.to_float32(0.1)
    assert types.FLOAT32(0.1).data != 0.1
    c = types.COMPLEX64(0.1)
    assert c.data == complex(utils.to_float32(0.1), 0)
    assert types.COMPLEX128(2).data == 2 + 0j


def test_convert_array():
    v = reflect.typed("[3]int", [1])
    assert [x.data for x in v.data] == [1, 0, 0]
    assert all(x.type == types.INT for x in v.data)


def test_convert_interfaces():
    v = reflect.typed("[]interface { Do() }", [None] * 3)
    assert all(x is types.NIL for x in v.data)

    my_int = types.named("myInt", types.INT)
    v = reflect.convert(
        types.slice_of(types.interface_of("Do()")), [my_int(1)]
    )
    assert v.data[0].type == my_int


def test_convert_composites():
    v = reflect.typed("struct { A int; B string }", (1, "b"))
    assert [x.data for x in v.data] == [1, "b"]

    p = types.pointer_to(types.INT)(5)
    assert p.data.type == types.INT and p.data.data == 5
    assert types.pointer_to(types.INT)(None).is_nil

    m = types.map_of(types.STRING, types.INT)({"a": 1})
    assert m.data == {"a": 1}


def test_typed_scope():
    my_int = types.named("myInt", types.INT)
    v = reflect.typed("[]myInt", [1, 2], {"myInt": my_int})
    assert v.data[1].type == my_int
    assert v.data[1].data == 2


def test_nested_nil():
    v = reflect.typed("[][]int", [None, []])
    nil, empty = v.data
    assert nil.is_nil
    assert not empty.is_nil
    assert isinstance(empty, Value)


@pytest.mark.parametrize(
    ("obj", "ty"),
    (
        (None, None),
        (True, types.BOOL),
        (2**64, types.INT),
        (b"", types.slice_of(types.UINT8)),
        ([2**64], types.slice_of(types.ANY)),
        ((1, 2), types.array_of(2, types.ANY)),
        (types.INT8(1), types.INT8),
    ),
)
def test_type_of(obj, ty):
    assert reflect.type_of(obj) == ty


def test_type_of_matches_value_of():
    for obj in (None, 1, 1.5, 1j, "a", b"a", [1], (1,), MyInt(1), object()):
        assert reflect.type_of(obj) == reflect.value_of(obj).type


def test_overflow_is_an_export_error():
    with pytest.raises(errors.IntegerOverflowError) as exc_info:
        reflect.value_of([0, [2**64]])
    assert isinstance(exc_info.value, OverflowError)
    assert str(exc_info.value) == "18446744073709551616 overflows int"
