"""
Clamping decorator for quantity functions.

`Clamped` wraps any `QuantityFunction` and saturates the scalar part of its
output to ``[lower_limit, upper_limit]``. The dimension of the output is left
untouched, so a clamped function can be wrapped, nested or persisted like any
other function.

A single registration covers every inner function: the inner function is
persisted with its own tag inside the ``function`` field::

    Clamped:
      lower_limit: 0.0
      upper_limit: 1.5
      function:
        Linear: {slope: 0.5, base_value: -3.0}
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping

from varquantity.core.errors import InvalidRangeError
from varquantity.core.quantity import DynQuantity
from varquantity.functions.base import (
    InfluencingFactors,
    QuantityFunction,
    function_from_payload,
    register_function,
)

logger = logging.getLogger(__name__)


def _as_limit(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    return float(value)


@register_function("Clamped")
class Clamped(QuantityFunction):
    """
    Saturate the output of ``function`` to ``[lower_limit, upper_limit]``.

    The limits are plain scalars compared against the SI magnitude of the
    inner output. Equal limits are allowed.

    Raises
    ------
    InvalidRangeError
        If ``upper_limit < lower_limit`` or either limit is NaN.
    """

    __slots__ = ("_function", "_lower_limit", "_upper_limit")

    _eq_fields = ("_function", "_lower_limit", "_upper_limit")

    def __init__(self, function: QuantityFunction, lower_limit: float, upper_limit: float) -> None:
        if not isinstance(function, QuantityFunction):
            raise TypeError(f"expected a QuantityFunction, got {type(function).__name__}")
        lower_limit = _as_limit(lower_limit, "lower_limit")
        upper_limit = _as_limit(upper_limit, "upper_limit")
        if upper_limit < lower_limit or math.isnan(lower_limit) or math.isnan(upper_limit):
            logger.debug("rejected Clamped: upper %r < lower %r", upper_limit, lower_limit)
            raise InvalidRangeError(lower_limit, upper_limit)
        self._function = function
        self._lower_limit = lower_limit
        self._upper_limit = upper_limit
        logger.debug("constructed %r", self)

    @property
    def inner(self) -> QuantityFunction:
        return self._function

    @property
    def lower_limit(self) -> float:
        return self._lower_limit

    @property
    def upper_limit(self) -> float:
        return self._upper_limit

    def call_clamped(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        """Evaluate the inner function and clamp the result."""
        out = self._function.call(influencing_factors)
        value = max(self._lower_limit, min(self._upper_limit, out.value))
        return DynQuantity(value, out.dim)

    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        return self.call_clamped(influencing_factors)

    def to_fields(self) -> Dict[str, Any]:
        return {
            "lower_limit": self._lower_limit,
            "upper_limit": self._upper_limit,
            "function": self._function.to_payload(),
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], registry=None) -> "Clamped":
        for name in ("function", "lower_limit", "upper_limit"):
            if name not in fields:
                raise KeyError(f"missing field {name!r}")
        inner = function_from_payload(fields["function"], registry)
        return cls(inner, fields["lower_limit"], fields["upper_limit"])
