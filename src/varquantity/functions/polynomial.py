"""
Polynomial quantity function in Horner form.

The coefficient list ``[a, b, c, d]`` is evaluated as ``a*x³ + b*x² + c*x + d``.
The last coefficient fixes the output dimension and, together with the
second to last one, the dimension of ``x``: ``dim(x) = d.dim / c.dim``.
Every other coefficient must fit that convention once multiplied by the
matching power of ``x``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from varquantity.core.dimensions import DIM_0, Dimension
from varquantity.core.errors import DimensionMismatchError
from varquantity.core.quantity import DynQuantity
from varquantity.functions.base import (
    InfluencingFactors,
    QuantityFunction,
    as_quantity,
    filter_unary_function,
    register_function,
)

logger = logging.getLogger(__name__)


def horner(coefficients: Iterable[float], x: float) -> float:
    """Evaluate ``[a, b, c]`` as ``a*x² + b*x + c``."""
    acc = 0.0
    for c in coefficients:
        acc = acc * x + c
    return acc


@register_function("Polynomial")
class Polynomial(QuantityFunction):
    """
    Polynomial defined by its coefficients, highest power first.

    With fewer than two coefficients there is nothing to compare: ``x`` is
    dimensionless and the output is the single coefficient (or a
    dimensionless zero for an empty list). Without a matching input the
    function returns its last coefficient.

    Examples
    --------
    >>> poly = Polynomial([-1.0, 3.0, 2.0])      # -x² + 3x + 2
    >>> poly([DynQuantity(2.0)]).value
    4.0
    >>> poly([]).value
    2.0

    Raises
    ------
    DimensionMismatchError
        If a coefficient times the matching power of ``x`` does not have
        the dimension of the last coefficient.
    """

    __slots__ = ("_coefficients", "_values", "_influencing_factor_dim", "_default_value")

    _eq_fields = ("_coefficients",)

    def __init__(self, coefficients: Iterable[Any]) -> None:
        coeffs: Tuple[DynQuantity, ...] = tuple(as_quantity(c) for c in coefficients)

        if len(coeffs) > 1:
            influencing_factor_dim = coeffs[-1].dim / coeffs[-2].dim
        else:
            influencing_factor_dim = DIM_0

        if coeffs:
            default_value = coeffs[-1]
            for power, c in enumerate(reversed(coeffs[:-1]), start=1):
                found = c.dim * influencing_factor_dim ** power
                if found != default_value.dim:
                    logger.debug(
                        "rejected Polynomial: coefficient %s of x^%d does not match %s",
                        c, power, default_value,
                    )
                    raise DimensionMismatchError(
                        default_value.dim, found, f"coefficient of x^{power}"
                    )
        else:
            default_value = DynQuantity(0.0)

        self._coefficients = coeffs
        self._values = tuple(c.value for c in coeffs)
        self._influencing_factor_dim = influencing_factor_dim
        self._default_value = default_value
        logger.debug("constructed %r", self)

    @property
    def coefficients(self) -> Tuple[DynQuantity, ...]:
        return self._coefficients

    @property
    def influencing_factor_dim(self) -> Dimension:
        return self._influencing_factor_dim

    @property
    def output_dim(self) -> Dimension:
        return self._default_value.dim

    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        return filter_unary_function(
            influencing_factors,
            self._influencing_factor_dim,
            lambda x: DynQuantity(horner(self._values, x.value), self._default_value.dim),
            lambda: self._default_value,
        )

    def to_fields(self) -> Dict[str, Any]:
        coefficients: List[Any] = [c.to_payload() for c in self._coefficients]
        return {"coefficients": coefficients}

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], registry=None) -> "Polynomial":
        if "coefficients" not in fields:
            raise KeyError("missing field 'coefficients'")
        raw = fields["coefficients"]
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
            raise TypeError(f"'coefficients' must be a list, got {type(raw).__name__}")
        return cls(DynQuantity.from_payload(c) for c in raw)
