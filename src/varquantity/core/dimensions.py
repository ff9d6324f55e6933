# varquantity.core.dimensions

from __future__ import annotations
from typing import Iterable, Union, Tuple, TypeAlias, Any

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", DimTuple, Iterable[int]]

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of integer exponents for SI base dimensions
    (L, M, T, I, Θ, N, J).

    Tuple subclass => hashable, comparable, usable as dict keys.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return tuple.__new__(cls, data)

        t = tuple(_as_int_exponent(x) for x in data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        return tuple.__new__(cls, t)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension": # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        # Python may call __pow__ with a third arg (modulo); reject it
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return Dimension(e * n for e in self)

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        """Handles (tuple / Dimension) by calculating (other / self)."""
        return Dimension(other) / self

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., (1,2) + MASS)."""
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    def as_tuple(self) -> DimTuple:
        return tuple(self)

    def __repr__(self) -> str:
        names = ("L", "M", "T", "I", "Θ", "N", "J")
        parts = "".join(f"[{n}^{v}]" for n, v in zip(names, self, strict=True) if v != 0)
        return parts or "[1]"


def _as_int_exponent(x: Any) -> int:
    if isinstance(x, bool):
        raise ValueError("Dimension exponents must be integers, got bool")
    if isinstance(x, int):
        return x
    if isinstance(x, float) and x.is_integer():
        return int(x)
    raise ValueError(f"Dimension exponents must be integers, got {x!r}")

# --- Base dimensions ---------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))

# --- Derived dimensions ------------------------------------------------------

AREA: Dim         = LENGTH ** 2
VOLUME: Dim       = LENGTH ** 3
VELOCITY: Dim     = LENGTH / TIME
FREQUENCY: Dim    = TIME ** -1                       # Hz, Bq
FORCE: Dim        = MASS * LENGTH / TIME ** 2        # N
PRESSURE: Dim     = FORCE / AREA                     # Pa
ENERGY: Dim       = FORCE * LENGTH                   # J
TORQUE: Dim       = ENERGY                           # N·m
POWER: Dim        = ENERGY / TIME                    # W
CHARGE: Dim       = CURRENT * TIME                   # C
VOLTAGE: Dim      = POWER / CURRENT                  # V
RESISTANCE: Dim   = VOLTAGE / CURRENT                # Ω
RESISTIVITY: Dim  = RESISTANCE * LENGTH              # Ω·m
CONDUCTANCE: Dim  = CURRENT / VOLTAGE                # S
CAPACITANCE: Dim  = CHARGE / VOLTAGE                 # F
FLUX: Dim         = VOLTAGE * TIME                   # Wb
FLUX_DENSITY: Dim = FLUX / AREA                      # T (tesla)
INDUCTANCE: Dim   = FLUX / CURRENT                   # H
DOSE: Dim         = ENERGY / MASS                    # Gy, Sv
CATALYTIC: Dim    = AMOUNT / TIME                    # kat
ILLUMINANCE: Dim  = LUMINOUS / AREA                  # lx
