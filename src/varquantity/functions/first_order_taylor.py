"""
First order Taylor expansion ``y = base_value * (1 + slope * (x - expansion_point))``.

The classic use is the linearised temperature dependency of a material
property, e.g. the electrical resistivity ``rho(T) = rho0 * (1 + alpha * (T - T0))``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from varquantity.core.dimensions import DIM_0, Dimension
from varquantity.core.errors import DimensionMismatchError
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


@register_function("FirstOrderTaylor")
class FirstOrderTaylor(QuantityFunction):
    """
    ``y = base_value * (1 + slope * (x - expansion_point))``

    ``x`` must have the dimension of ``expansion_point``, and
    ``slope * expansion_point`` must be dimensionless. Without a matching
    input ``x`` is taken as zero, i.e. the function returns ``base_value``.

    Examples
    --------
    >>> fot = FirstOrderTaylor(
    ...     DynQuantity.parse("2 ohm*m"),
    ...     DynQuantity.parse("0.5 / K"),
    ...     DynQuantity.parse("30 K"),
    ... )
    >>> fot([DynQuantity.parse("60 K")]).value
    32.0

    Raises
    ------
    DimensionMismatchError
        If ``slope.dim * expansion_point.dim`` is not dimensionless.
    """

    __slots__ = ("_base_value", "_slope", "_expansion_point")

    _eq_fields = ("_base_value", "_slope", "_expansion_point")

    def __init__(self, base_value: Any, slope: Any, expansion_point: Any) -> None:
        base_value = as_quantity(base_value)
        slope = as_quantity(slope)
        expansion_point = as_quantity(expansion_point)

        found = expansion_point.dim * slope.dim
        if found != DIM_0:
            logger.debug(
                "rejected FirstOrderTaylor: slope %s and expansion point %s do not cancel",
                slope, expansion_point,
            )
            raise DimensionMismatchError(DIM_0, found, "slope * expansion_point")

        self._base_value = base_value
        self._slope = slope
        self._expansion_point = expansion_point
        logger.debug("constructed %r", self)

    @property
    def base_value(self) -> DynQuantity:
        return self._base_value

    @property
    def slope(self) -> DynQuantity:
        return self._slope

    @property
    def expansion_point(self) -> DynQuantity:
        return self._expansion_point

    @property
    def influencing_factor_dim(self) -> Dimension:
        return self._expansion_point.dim

    @property
    def output_dim(self) -> Dimension:
        return self._base_value.dim

    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        def matched(x: DynQuantity) -> DynQuantity:
            delta = x.value - self._expansion_point.value
            return DynQuantity(
                self._base_value.value * (1.0 + self._slope.value * delta),
                self._base_value.dim,
            )

        return filter_unary_function(
            influencing_factors,
            self._expansion_point.dim,
            matched,
            lambda: self._base_value,
        )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "base_value": self._base_value.to_payload(),
            "slope": self._slope.to_payload(),
            "expansion_point": self._expansion_point.to_payload(),
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], registry=None) -> "FirstOrderTaylor":
        return cls(
            quantity_field(fields, "base_value"),
            quantity_field(fields, "slope"),
            quantity_field(fields, "expansion_point"),
        )
