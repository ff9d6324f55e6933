"""
Linear quantity function ``y = slope * x + base_value``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from varquantity.core.dimensions import Dimension
from varquantity.core.quantity import DynQuantity
from varquantity.functions.base import (
    InfluencingFactors,
    QuantityFunction,
    as_quantity,
    filter_unary_function,
    quantity_field,
    register_function,
)

logger = logging.getLogger(__name__)


@register_function("Linear")
class Linear(QuantityFunction):
    """
    ``y = slope * x + base_value``

    The influencing factor ``x`` is the first input whose dimension is
    ``base_value.dim / slope.dim``. Without such an input the function
    returns ``base_value``.

    Examples
    --------
    >>> lin = Linear(DynQuantity.parse("2 V"), DynQuantity.parse("0.5 W"))
    >>> lin([DynQuantity.parse("2.5 A")]).value
    5.5
    """

    __slots__ = ("_slope", "_base_value", "_influencing_factor_dim")

    _eq_fields = ("_slope", "_base_value")

    def __init__(self, slope: Any, base_value: Any) -> None:
        slope = as_quantity(slope)
        base_value = as_quantity(base_value)
        self._slope = slope
        self._base_value = base_value
        self._influencing_factor_dim = base_value.dim / slope.dim
        logger.debug("constructed %r", self)

    @property
    def slope(self) -> DynQuantity:
        return self._slope

    @property
    def base_value(self) -> DynQuantity:
        return self._base_value

    @property
    def influencing_factor_dim(self) -> Dimension:
        return self._influencing_factor_dim

    @property
    def output_dim(self) -> Dimension:
        return self._base_value.dim

    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        return filter_unary_function(
            influencing_factors,
            self._influencing_factor_dim,
            lambda x: DynQuantity(
                self._slope.value * x.value + self._base_value.value, self._base_value.dim
            ),
            lambda: self._base_value,
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "slope": self._slope.to_payload(),
            "base_value": self._base_value.to_payload(),
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], registry=None) -> "Linear":
        return cls(quantity_field(fields, "slope"), quantity_field(fields, "base_value"))
