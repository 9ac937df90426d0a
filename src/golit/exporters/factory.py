from __future__ import annotations

import dataclasses
import functools
from typing import Any

from structlog import get_logger

from golit import errors, reflect, types

from .base import Chain, CycleGuard, Disposable, Encoder
from .composite import ANY_NAME, CompositeEncoder
from .scalars import (
    BoolEncoder,
    BytesEncoder,
    NilEncoder,
    NumberEncoder,
    StringEncoder,
)

__all__ = (
    "Config",
    "Exporter",
    "default_exporter",
    "export",
    "must_export",
    "cast_to_string",
    "must_cast_to_string",
)

logger = get_logger()


@dataclasses.dataclass(frozen=True, slots=True)
class Config:
    """How values get exported.

    Attributes:
      explicit_type: Wrap numbers in a conversion to their type (``int(5)``
        instead of ``5``).
      any_name: How ``interface{}`` is spelled in the type of slices and
        arrays (``any`` is accepted by go >= 1.18).
    """

    explicit_type: bool = True
    any_name: str = ANY_NAME


def build_exporter(config: Config) -> Encoder:
    """Wire a new exporter.

    The composite encoder and the cycle guard reference each other: elements of
    slices get rendered through the guard.
    """
    composite = CompositeEncoder(any_name=config.any_name)
    res = CycleGuard(
        Chain(
            BoolEncoder(),
            NilEncoder(),
            NumberEncoder(explicit_type=config.explicit_type),
            StringEncoder(),
            BytesEncoder(),
            composite,
        )
    )
    composite.encoder = res
    return res


def build_caster() -> Encoder:
    # Only primitives: this cannot recurse.
    return Chain(
        BoolEncoder(),
        NilEncoder(),
        NumberEncoder(explicit_type=False),
    )


class Exporter:
    """Export values as go code.

    Every call to :meth:`export` uses its own encoders so an :class:`Exporter`
    can be shared between threads.
    """

    config: Config
    exporter: Encoder
    caster: Encoder

    def __init__(self, config: Config | None = None) -> None:
        self.config = Config() if config is None else config
        self.exporter = Disposable(
            functools.partial(build_exporter, self.config)
        )
        self.caster = build_caster()

    def export(self, obj: Any) -> str:
        """Render *obj* as a go literal.

        Raises:
          ExportError: if *obj* (or one of its elements) cannot be exported.
        """
        log = logger.new(type=_type_name(obj))
        log.debug("exporting value")
        try:
            return self.exporter.render(reflect.value_of(obj))
        except errors.ExportError as e:
            log.debug("export failed", error=str(e))
            raise
        except RecursionError as e:
            log.debug("export failed", error="recursion limit reached")
            raise errors.NestingTooDeepError() from e

    def cast_to_string(self, obj: Any) -> str:
        """Render a primitive value as a string.

        + strings are returned as is,
        + booleans are ``"true"`` or ``"false"``,
        + numbers are printed without their type,
        + ``None`` is ``"nil"``.

        Raises:
          UnsupportedTypeError: for any other value.
        """
        if type(obj) is str:
            return obj
        log = logger.new(type=_type_name(obj))
        try:
            value = reflect.value_of(obj)
            if value.type == types.STRING:
                return str(value.data)
            log.debug("casting value to string")
            return self.caster.render(value)
        except errors.ExportError as e:
            log.debug("cast failed", error=str(e))
            raise
        except RecursionError as e:
            log.debug("cast failed", error="recursion limit reached")
            raise errors.NestingTooDeepError() from e


@functools.lru_cache()
def default_exporter() -> Exporter:
    return Exporter(Config())


def _type_name(obj: Any) -> str:
    # Doesn't convert *obj*: conversion errors are reported by the caller
    t = reflect.type_of(obj)
    return "<nil>" if t is None else str(t)


def export(obj: Any) -> str:
    """Export *obj* as go code.

    >>> print(export([None, 1.5, "hello world"]))
    []interface{}{nil, float64(1.5), "hello world"}
    >>> print(export(types.array_of(2, types.UINT)([1, 2])))
    [2]uint{uint(1), uint(2)}

    Raises:
      ExportError:
    """
    return default_exporter().export(obj)


def must_export(obj: Any) -> str:
    """Like :func:`export` but raises :class:`~golit.errors.ExportPanic`"""
    try:
        return export(obj)
    except errors.ExportError as e:
        raise errors.ExportPanic(
            f"cannot export {_type_name(obj)} to string: {e}"
        ) from e


def cast_to_string(obj: Any) -> str:
    """Cast a primitive value to a string.

    >>> cast_to_string(5)
    '5'
    >>> cast_to_string("hello")
    'hello'
    """
    return default_exporter().cast_to_string(obj)


def must_cast_to_string(obj: Any) -> str:
    """Like :func:`cast_to_string` but failures raise
    :class:`~golit.errors.ExportPanic`"""
    try:
        return cast_to_string(obj)
    except errors.ExportError as e:
        raise errors.ExportPanic(
            f"cannot cast {_type_name(obj)} to string: {e}"
        ) from e

