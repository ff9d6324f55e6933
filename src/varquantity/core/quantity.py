"""
varquantity.core.quantity
=========================

Defines `DynQuantity`, the dynamically typed dimensional value: a scalar SI
magnitude paired with a `Dimension`.

This is the currency every quantity function speaks. It supports:
- Dimensional arithmetic (products, quotients and integer powers combine
  dimensions; sums require equal dimensions).
- Parsing from human-readable text such as ``"2 ohm*m"`` or ``"0.5 / K"``.
- A plain-data payload form (bare number or unit string) for persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isclose
from typing import TYPE_CHECKING, Any, Union

from varquantity.core.dimensions import DIM_0, Dimension
from varquantity.core.errors import DimensionMismatchError
from varquantity.core.utils import format_dim, format_dim_expr

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from varquantity.units.registry import UnitsRegistry

Number = Union[int, float]
QuantityPayload = Union[float, str]


@dataclass(frozen=True, slots=True, eq=False)
class DynQuantity:
    """
    A scalar paired with a dimension.

    Attributes
    ----------
    value : float
        The magnitude expressed in SI base units.
    dim : Dimension
        The physical dimension, e.g. ``LENGTH`` for a length.
    """

    value: float
    dim: Dimension = DIM_0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise TypeError("DynQuantity value must be a number, got bool")
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "dim", Dimension(self.dim))

    # --- construction helpers ---
    @classmethod
    def parse(cls, text: str, registry: "UnitsRegistry | None" = None) -> DynQuantity:
        """Parse text like ``"2 ohm*m"``, ``"1e-3 T"`` or ``"1/(2.0e6) Ohm*m"``.

        Raises
        ------
        ValueError
            If the text is malformed or names an unknown unit.
        """
        from varquantity.units.parser import parse_quantity

        if registry is None:
            from varquantity.units.registry import DEFAULT_REGISTRY

            registry = DEFAULT_REGISTRY
        return parse_quantity(text, registry)

    @classmethod
    def from_payload(cls, obj: Any, registry: "UnitsRegistry | None" = None) -> DynQuantity:
        """Build a quantity from a bare number (dimensionless) or a unit string."""
        if isinstance(obj, DynQuantity):
            return obj
        if isinstance(obj, bool):
            raise TypeError("Expected a number or a unit string, got bool")
        if isinstance(obj, (int, float)):
            return cls(float(obj))
        if isinstance(obj, str):
            return cls.parse(obj, registry)
        raise TypeError(f"Expected a number or a unit string, got {type(obj).__name__}")

    def to_payload(self) -> QuantityPayload:
        """Bare float when dimensionless, otherwise ``"<value> <base SI units>"``."""
        if self.dim == DIM_0:
            return self.value
        return f"{self.value!r} {format_dim_expr(self.dim)}"

    # --- comparison ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynQuantity):
            return NotImplemented
        # Same physical dimension; SI magnitudes equal within tolerance.
        return (
            self.dim == other.dim
            and isclose(self.value, other.value, rel_tol=1e-12, abs_tol=0.0)
        )

    __hash__ = None  # type: ignore[assignment]

    def _require_same_dim(self, other: DynQuantity, op: str) -> None:
        if self.dim != other.dim:
            raise DimensionMismatchError(self.dim, other.dim, f"{op} requires same dimensions")

    # --- arithmetic ---
    def __add__(self, other: DynQuantity) -> DynQuantity:
        if not isinstance(other, DynQuantity):
            return NotImplemented
        self._require_same_dim(other, "add")
        return DynQuantity(self.value + other.value, self.dim)

    def __sub__(self, other: DynQuantity) -> DynQuantity:
        if not isinstance(other, DynQuantity):
            return NotImplemented
        self._require_same_dim(other, "sub")
        return DynQuantity(self.value - other.value, self.dim)

    def __neg__(self) -> DynQuantity:
        return DynQuantity(-self.value, self.dim)

    def __mul__(self, other: "DynQuantity | Number") -> DynQuantity:
        if isinstance(other, (int, float)):
            return DynQuantity(self.value * float(other), self.dim)
        if isinstance(other, DynQuantity):
            return DynQuantity(self.value * other.value, self.dim * other.dim)
        return NotImplemented

    def __rmul__(self, other: Number) -> DynQuantity:
        # allows 3 * q
        if isinstance(other, (int, float)):
            return DynQuantity(self.value * float(other), self.dim)
        return NotImplemented

    def __truediv__(self, other: "DynQuantity | Number") -> DynQuantity:
        if isinstance(other, (int, float)):
            return DynQuantity(self.value / float(other), self.dim)
        if isinstance(other, DynQuantity):
            return DynQuantity(self.value / other.value, self.dim / other.dim)
        return NotImplemented

    def __rtruediv__(self, other: Number) -> DynQuantity:
        # scalar / quantity -> inverse dimension
        if isinstance(other, (int, float)):
            return DynQuantity(float(other) / self.value, DIM_0 / self.dim)
        return NotImplemented

    def __pow__(self, n: int) -> DynQuantity:
        return DynQuantity(self.value ** n, self.dim ** n)

    # --- display ---
    def __str__(self) -> str:
        if self.dim == DIM_0:
            return f"{self.value:.15g}"
        return f"{self.value:.15g} {format_dim(self.dim)}"

    def __repr__(self) -> str:
        return f"DynQuantity({self.value!r}, {self.dim!r})"
