from __future__ import annotations

from dataclasses import dataclass
from math import isclose, isfinite
from typing import TYPE_CHECKING

from varquantity.core.dimensions import Dim, Dimension

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from varquantity.core.quantity import DynQuantity


@dataclass(frozen=True, slots=True)
class Unit:
    """
    A named, purely multiplicative unit.

    Attributes
    ----------
    name : str
        Symbol (e.g., "m", "s", "kg", "mT").
    scale_to_si : float
        Multiplicative factor to convert 1 of this unit to SI for its dimension.
        Examples: m=1.0, mT=1e-3, h=3600.0.
    dim : Dim
        Dimension vector (L,M,T,I,Θ,N,J). E.g., meters -> (1,0,0,0,0,0,0).
    """

    name: str
    scale_to_si: float
    dim: Dim

    def __post_init__(self) -> None:
        if len(self.dim) != 7:
            raise ValueError("dim must be a 7-tuple (L,M,T,I,Θ,N,J)")
        if not (self.scale_to_si > 0 and isfinite(self.scale_to_si)):
            raise ValueError("scale_to_si must be a positive, finite number")
        object.__setattr__(self, "dim", Dimension(self.dim))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        # dimension must match exactly; scale_to_si can have tiny FP noise
        return (
            self.dim == other.dim
            and isclose(self.scale_to_si, other.scale_to_si, rel_tol=1e-12, abs_tol=0.0)
        )

    def __hash__(self) -> int:
        return hash(self.dim)

    def __rmul__(self, value: float) -> "DynQuantity":
        # allows 2 * ureg.get("kW") -> DynQuantity(2000.0, POWER)
        from varquantity.core.quantity import DynQuantity

        return DynQuantity(float(value) * self.scale_to_si, self.dim)

    def to_quantity(self) -> "DynQuantity":
        """The SI value of one of this unit."""
        from varquantity.core.quantity import DynQuantity

        return DynQuantity(self.scale_to_si, self.dim)
