"""
``golit.exporters``: go literals
================================

:mod:`~golit.exporters` prints values as go literals. Pasting the output in
go code and compiling it gives back the exported value.

Only a fixed set of types can be printed. There is no fallback for the
others: user defined types, structs, maps, pointers and functions are
rejected with an :class:`~golit.errors.UnsupportedTypeError`.

Supported types
---------------

+ ``bool`` and the nil interface
+ the integer and floating point types (``int``, ``uint8``, ``float32``...)
+ ``string``
+ ``[]byte`` (when it contains valid utf8)
+ slices and arrays of any of the above (including ``interface{}``), with any
  number of dimensions

Self-referential slices are detected and rejected.

"""
from __future__ import annotations

from .base import Chain, CycleGuard, Disposable, Encoder, Stack
from .composite import CompositeEncoder
from .factory import (
    Config,
    Exporter,
    build_caster,
    build_exporter,
    cast_to_string,
    default_exporter,
    export,
    must_cast_to_string,
    must_export,
)
from .scalars import (
    BoolEncoder,
    BytesEncoder,
    NilEncoder,
    NumberEncoder,
    StringEncoder,
)

__all__ = (
    "export",
    "must_export",
    "cast_to_string",
    "must_cast_to_string",
    "Config",
    "Exporter",
    "default_exporter",
    "build_exporter",
    "build_caster",
    "Encoder",
    "Chain",
    "CycleGuard",
    "Disposable",
    "Stack",
    "BoolEncoder",
    "NilEncoder",
    "NumberEncoder",
    "StringEncoder",
    "BytesEncoder",
    "CompositeEncoder",
)
