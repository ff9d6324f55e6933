"""
Sum of exponentials ``y = Σ amplitude_i * exp(exponent_i * x)``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple

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


@dataclass(frozen=True, slots=True)
class ExpTerm:
    """One summand ``amplitude * exp(exponent * x)``."""

    amplitude: DynQuantity
    exponent: DynQuantity

    def __post_init__(self) -> None:
        object.__setattr__(self, "amplitude", as_quantity(self.amplitude))
        object.__setattr__(self, "exponent", as_quantity(self.exponent))

    def to_fields(self) -> Dict[str, Any]:
        return {
            "amplitude": self.amplitude.to_payload(),
            "exponent": self.exponent.to_payload(),
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "ExpTerm":
        if not isinstance(fields, Mapping):
            raise TypeError(f"an exponential term must be a mapping, got {fields!r}")
        return cls(quantity_field(fields, "amplitude"), quantity_field(fields, "exponent"))


@register_function("Exponential")
class Exponential(QuantityFunction):
    """
    Sum of `ExpTerm` summands.

    All amplitudes must share one dimension (the output dimension) and all
    exponents must share one dimension, whose inverse is the dimension of
    ``x``. Without a matching input the function returns the sum of the
    amplitudes. Zero or one term never fails the consistency check; with no
    terms ``x`` and the output are dimensionless.

    Examples
    --------
    >>> exp = Exponential([ExpTerm(2.0, 2.0), ExpTerm(-3.0, 0.0)])
    >>> exp([DynQuantity(0.0)]).value
    -1.0
    """

    __slots__ = ("_terms", "_influencing_factor_dim", "_output_dim")

    _eq_fields = ("_terms",)

    def __init__(self, terms: Iterable[ExpTerm]) -> None:
        terms = tuple(terms)
        for t in terms:
            if not isinstance(t, ExpTerm):
                raise TypeError(f"expected ExpTerm, got {type(t).__name__}")

        for first, second in zip(terms, terms[1:]):
            if first.amplitude.dim != second.amplitude.dim:
                logger.debug("rejected Exponential: amplitude dimensions differ")
                raise DimensionMismatchError(
                    first.amplitude.dim, second.amplitude.dim, "amplitude"
                )
            if first.exponent.dim != second.exponent.dim:
                logger.debug("rejected Exponential: exponent dimensions differ")
                raise DimensionMismatchError(
                    first.exponent.dim, second.exponent.dim, "exponent"
                )

        if terms:
            self._influencing_factor_dim = terms[0].exponent.dim ** -1
            self._output_dim = terms[0].amplitude.dim
        else:
            self._influencing_factor_dim = DIM_0
            self._output_dim = DIM_0
        self._terms = terms
        logger.debug("constructed %r", self)

    @property
    def terms(self) -> Tuple[ExpTerm, ...]:
        return self._terms

    @property
    def influencing_factor_dim(self) -> Dimension:
        return self._influencing_factor_dim

    @property
    def output_dim(self) -> Dimension:
        return self._output_dim

    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        def matched(x: DynQuantity) -> DynQuantity:
            total = math.fsum(
                t.amplitude.value * math.exp(t.exponent.value * x.value) for t in self._terms
            )
            return DynQuantity(total, self._output_dim)

        def no_match() -> DynQuantity:
            return DynQuantity(math.fsum(t.amplitude.value for t in self._terms), self._output_dim)

        return filter_unary_function(
            influencing_factors, self._influencing_factor_dim, matched, no_match
        )

    def to_fields(self) -> Dict[str, Any]:
        return {"terms": [t.to_fields() for t in self._terms]}

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], registry=None) -> "Exponential":
        if "terms" not in fields:
            raise KeyError("missing field 'terms'")
        raw = fields["terms"]
        if not isinstance(raw, list):
            raise TypeError(f"'terms' must be a list, got {type(raw).__name__}")
        return cls(ExpTerm.from_fields(t) for t in raw)
