"""Export python values as go literals"""
from __future__ import annotations

from importlib import metadata

from .errors import (
    CompositeElementError,
    ExportError,
    ExportPanic,
    InfiniteLoopError,
    IntegerOverflowError,
    NestingTooDeepError,
    UnsupportedTypeError,
)
from .exporters import (
    Config,
    Exporter,
    cast_to_string,
    export,
    must_cast_to_string,
    must_export,
)
from .reader import load_msgpack, load_text
from .reflect import convert, type_of, typed, value_of
from .types import (
    ANY,
    BOOL,
    BYTE,
    COMPLEX64,
    COMPLEX128,
    FLOAT32,
    FLOAT64,
    FUNC,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    NIL,
    RUNE,
    STRING,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINTPTR,
    GoType,
    Kind,
    Value,
    array_of,
    interface_of,
    map_of,
    named,
    parse_type,
    pointer_to,
    slice_of,
    struct_of,
    zero,
)

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "export",
    "must_export",
    "cast_to_string",
    "must_cast_to_string",
    "Config",
    "Exporter",
    "ExportError",
    "ExportPanic",
    "UnsupportedTypeError",
    "CompositeElementError",
    "InfiniteLoopError",
    "IntegerOverflowError",
    "NestingTooDeepError",
    "value_of",
    "type_of",
    "convert",
    "typed",
    "load_text",
    "load_msgpack",
    "GoType",
    "Kind",
    "Value",
    "NIL",
    "zero",
    "parse_type",
    "slice_of",
    "array_of",
    "pointer_to",
    "map_of",
    "interface_of",
    "struct_of",
    "named",
    "ANY",
    "BOOL",
    "BYTE",
    "RUNE",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINTPTR",
    "FLOAT32",
    "FLOAT64",
    "COMPLEX64",
    "COMPLEX128",
    "STRING",
    "FUNC",
)
