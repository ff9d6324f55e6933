"""
varquantity.core.kinds
======================

Statically typed quantity kinds.

A kind is a class bound to exactly one dimension (``Power``, ``Length``,
``ElectricalResistance``, ...). Values of a kind are created either directly
or from a `DynQuantity`, in which case the dimension is checked. The builtin
``float`` is accepted wherever a kind is expected and stands for a
dimensionless quantity.

>>> p = Power.new(2.0, "kW")
>>> p.value
2000.0
>>> p.get("W")
2000.0
"""

from __future__ import annotations

from math import isclose
from typing import Any, ClassVar, Dict, Type, TypeVar, Union

from varquantity.core import dimensions as dims
from varquantity.core.dimensions import DIM_0, Dimension
from varquantity.core.errors import DimensionMismatchError
from varquantity.core.quantity import DynQuantity
from varquantity.core.utils import format_dim

K = TypeVar("K", bound="QuantityKind")

_KINDS: Dict[str, Type["QuantityKind"]] = {}


class QuantityKind:
    """Base class for quantities whose dimension is fixed by their type.

    Subclasses set the ``dim`` class attribute. ``value`` holds the SI
    magnitude.
    """

    __slots__ = ("value",)

    dim: ClassVar[Dimension]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "dim" not in cls.__dict__:
            raise TypeError(f"{cls.__name__} must define a 'dim' class attribute")
        cls.dim = Dimension(cls.dim)
        _KINDS[cls.__name__] = cls

    def __init__(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{type(self).__name__} value must be a number, got {type(value).__name__}")
        self.value = float(value)

    @classmethod
    def new(cls: Type[K], value: float, unit: str) -> K:
        """Create a value from a magnitude in ``unit`` (e.g. ``Power.new(2, "kW")``)."""
        return cls.from_dyn(value * _resolve_unit(unit).to_quantity())

    @classmethod
    def from_dyn(cls: Type[K], quantity: DynQuantity) -> K:
        if quantity.dim != cls.dim:
            raise DimensionMismatchError(cls.dim, quantity.dim, f"cannot convert to {cls.__name__}")
        return cls(quantity.value)

    def to_dyn(self) -> DynQuantity:
        return DynQuantity(self.value, self.dim)

    def get(self, unit: str) -> float:
        """The magnitude expressed in ``unit``."""
        u = _resolve_unit(unit)
        if u.dim != self.dim:
            raise DimensionMismatchError(self.dim, u.dim, f"cannot express {type(self).__name__} in {unit!r}")
        return self.value / u.scale_to_si

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantityKind):
            return NotImplemented
        return self.dim == other.dim and isclose(self.value, other.value, rel_tol=1e-12, abs_tol=0.0)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self) -> str:
        return str(self.to_dyn())


def _resolve_unit(unit: str):
    from varquantity.units.parser import extract_unit_expr
    from varquantity.units.registry import DEFAULT_REGISTRY

    return extract_unit_expr(unit, DEFAULT_REGISTRY)


# --- Built-in kinds ----------------------------------------------------------

class Length(QuantityKind):
    dim = dims.LENGTH

class Area(QuantityKind):
    dim = dims.AREA

class Volume(QuantityKind):
    dim = dims.VOLUME

class Mass(QuantityKind):
    dim = dims.MASS

class Time(QuantityKind):
    dim = dims.TIME

class ElectricCurrent(QuantityKind):
    dim = dims.CURRENT

class ThermodynamicTemperature(QuantityKind):
    dim = dims.TEMPERATURE

class AmountOfSubstance(QuantityKind):
    dim = dims.AMOUNT

class LuminousIntensity(QuantityKind):
    dim = dims.LUMINOUS

class Velocity(QuantityKind):
    dim = dims.VELOCITY

class Frequency(QuantityKind):
    dim = dims.FREQUENCY

class Force(QuantityKind):
    dim = dims.FORCE

class Pressure(QuantityKind):
    dim = dims.PRESSURE

class Energy(QuantityKind):
    dim = dims.ENERGY

class Torque(QuantityKind):
    dim = dims.TORQUE

class Power(QuantityKind):
    dim = dims.POWER

class ElectricCharge(QuantityKind):
    dim = dims.CHARGE

class ElectricPotential(QuantityKind):
    dim = dims.VOLTAGE

class ElectricalResistance(QuantityKind):
    dim = dims.RESISTANCE

class ElectricalResistivity(QuantityKind):
    dim = dims.RESISTIVITY

class ElectricalConductance(QuantityKind):
    dim = dims.CONDUCTANCE

class Capacitance(QuantityKind):
    dim = dims.CAPACITANCE

class MagneticFlux(QuantityKind):
    dim = dims.FLUX

class MagneticFluxDensity(QuantityKind):
    dim = dims.FLUX_DENSITY

class Inductance(QuantityKind):
    dim = dims.INDUCTANCE


# --- Kind-generic helpers ----------------------------------------------------

Kind = Union[Type[float], Type[QuantityKind]]


def kind_by_name(name: str) -> Type[QuantityKind]:
    """Look up a kind class by its name (``"Power"`` -> `Power`)."""
    try:
        return _KINDS[name]
    except KeyError:
        raise ValueError(f"Unknown quantity kind: {name!r}") from None


def unit_from_type(kind: Kind) -> Dimension:
    """The dimension declared by ``kind`` (``float`` is dimensionless)."""
    if kind is float:
        return DIM_0
    if isinstance(kind, type) and issubclass(kind, QuantityKind):
        return kind.dim
    raise TypeError(f"Not a quantity kind: {kind!r}")


def kind_from_dyn(kind: Kind, quantity: DynQuantity) -> Any:
    """Convert ``quantity`` to ``kind``; raises DimensionMismatchError when the
    dimensions differ."""
    if kind is float:
        if quantity.dim != DIM_0:
            raise DimensionMismatchError(DIM_0, quantity.dim, "cannot convert to float")
        return quantity.value
    return kind.from_dyn(quantity)


def kind_to_dyn(value: Any) -> DynQuantity:
    """Convert a kind value (or a plain number) back to a DynQuantity."""
    if isinstance(value, QuantityKind):
        return value.to_dyn()
    if isinstance(value, DynQuantity):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return DynQuantity(float(value))
    raise TypeError(f"Not a quantity value: {value!r}")


def kind_name(kind: Kind) -> str:
    return kind.__name__ if isinstance(kind, type) else repr(kind)


def describe_kind(kind: Kind) -> str:
    """'Power [kg·m²/s³]' style label used in log and error messages."""
    return f"{kind_name(kind)} [{format_dim(unit_from_type(kind))}]"


def kind_from_payload(kind: Kind, payload: Any) -> Any:
    """Build a ``kind`` value from plain data.

    A bare number is taken as the SI magnitude of ``kind`` (``0.001`` for a
    `MagneticFluxDensity` is one millitesla). A string is parsed as a
    quantity expression and must have the dimension of ``kind``.
    """
    if isinstance(payload, (int, float)) and not isinstance(payload, bool):
        return kind_from_dyn(kind, DynQuantity(float(payload), unit_from_type(kind)))
    return kind_from_dyn(kind, DynQuantity.from_payload(payload))
