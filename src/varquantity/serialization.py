"""
YAML persistence for quantity functions and variable quantities.

Functions are written in their tagged form::

    Exponential:
      terms:
      - {amplitude: 2.0, exponent: 2.0}
      - {amplitude: -3.0, exponent: 0.0}

Constants are written as a bare number (dimensionless) or as a unit string
in SI base units (``0.001 kg*s^-2*A^-1``). When loading, a bare number is
read as the SI magnitude of the requested kind.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import yaml

from varquantity.core.errors import DeserializationError
from varquantity.functions.base import FunctionRegistry, QuantityFunction, function_from_payload
from varquantity.variable import VarQuantity

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _safe_load(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DeserializationError(f"invalid YAML: {e}") from e


def _dump(payload: Any) -> str:
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)


def dump_function(function: QuantityFunction) -> str:
    return _dump(function.to_payload())


def load_function(text: str, registry: Optional[FunctionRegistry] = None) -> QuantityFunction:
    """Parse a YAML document holding one tagged function."""
    return function_from_payload(_safe_load(text), registry)


def dump_var_quantity(quantity: VarQuantity[Any]) -> str:
    return _dump(quantity.to_payload())


def load_var_quantity(
    text: str, kind: Type[T], registry: Optional[FunctionRegistry] = None
) -> VarQuantity[T]:
    """Parse a YAML document into a `VarQuantity` of ``kind``.

    See `VarQuantity.from_payload` for how constants and functions are told
    apart.
    """
    payload = _safe_load(text)
    logger.debug("loading %s from %r", getattr(kind, "__name__", kind), payload)
    return VarQuantity.from_payload(kind, payload, registry)
