"""
varquantity.variable
====================

`VarQuantity` is the value client code stores for a physical property that
may or may not depend on other quantities. It has exactly two variants:

- `Constant` holds a fixed value of the target kind.
- `Function` holds a `FunctionWrapper` that was dimension-checked on
  construction.

Both answer `get(influencing_factors)`; everything else happens when the
value is built.

>>> from varquantity.core.kinds import ElectricalResistivity
>>> rho = VarQuantity.from_payload(ElectricalResistivity, "1/(2.0e6) Ohm*m")
>>> isinstance(rho, Constant)
True
"""

from __future__ import annotations

import copy
import logging
from typing import Any, ClassVar, Generic, Optional, Type, TypeVar

from varquantity.core.errors import DeserializationError
from varquantity.core.kinds import QuantityKind, describe_kind, kind_from_payload, kind_to_dyn
from varquantity.core.quantity import QuantityPayload
from varquantity.functions.base import (
    FunctionPayload,
    FunctionRegistry,
    InfluencingFactors,
    QuantityFunction,
)
from varquantity.wrapper import FunctionWrapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VarQuantity(Generic[T]):
    """Either a `Constant` or a `Function`. Cannot be subclassed further."""

    __slots__ = ()

    _sealed: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if VarQuantity._sealed:
            raise TypeError(
                f"cannot subclass {cls.__mro__[1].__name__}: VarQuantity has exactly "
                "two variants, Constant and Function"
            )

    def get(self, influencing_factors: InfluencingFactors = ()) -> T:
        raise NotImplementedError

    def __call__(self, influencing_factors: InfluencingFactors = ()) -> T:
        return self.get(influencing_factors)

    def clone(self) -> "VarQuantity[T]":
        return copy.deepcopy(self)

    def to_payload(self) -> Any:
        raise NotImplementedError

    @staticmethod
    def from_function(kind: Type[T], function: QuantityFunction) -> "Function[T]":
        """Wrap ``function`` for ``kind``; raises DimensionMismatchError on mismatch."""
        return Function(FunctionWrapper(kind, function))

    @staticmethod
    def from_payload(
        kind: Type[T], payload: Any, registry: Optional[FunctionRegistry] = None
    ) -> "VarQuantity[T]":
        """Build a constant or a function from plain data.

        A bare number (SI magnitude of ``kind``) or a unit string is tried as
        a constant first. Anything that does not convert is then tried as a
        tagged function payload.

        Raises
        ------
        DeserializationError
            If neither interpretation works. The message names both causes;
            ``__cause__`` is the function error.
        """
        try:
            return Constant(kind_from_payload(kind, payload))
        except (ValueError, TypeError) as e:
            constant_error = e
            logger.debug(
                "%r is not a constant %s (%s); trying a function", payload, describe_kind(kind), e
            )

        try:
            return Function(FunctionWrapper.from_payload(kind, payload, registry))
        except DeserializationError as e:
            raise DeserializationError(
                f"cannot build {describe_kind(kind)} from {payload!r}: "
                f"not a constant ({constant_error}); not a function ({e})"
            ) from e


class Constant(VarQuantity[T]):
    """A value that does not depend on any influencing factor."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        if not isinstance(value, QuantityKind) and (
            isinstance(value, bool) or not isinstance(value, (int, float))
        ):
            raise TypeError(f"expected a quantity kind value or a float, got {type(value).__name__}")
        self._value = float(value) if isinstance(value, int) else value

    @property
    def value(self) -> T:
        return self._value

    def get(self, influencing_factors: InfluencingFactors = ()) -> T:
        return copy.copy(self._value)

    def to_payload(self) -> QuantityPayload:
        return kind_to_dyn(self._value).to_payload()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return type(self._value) is type(other._value) and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Constant({self._value!r})"


class Function(VarQuantity[T]):
    """A dimension-checked quantity function evaluated on every `get`."""

    __slots__ = ("_wrapper",)

    def __init__(self, wrapper: FunctionWrapper[T]) -> None:
        if not isinstance(wrapper, FunctionWrapper):
            raise TypeError(f"expected a FunctionWrapper, got {type(wrapper).__name__}")
        self._wrapper = wrapper

    @property
    def wrapper(self) -> FunctionWrapper[T]:
        return self._wrapper

    def get(self, influencing_factors: InfluencingFactors = ()) -> T:
        return self._wrapper.call(influencing_factors)

    def to_payload(self) -> FunctionPayload:
        return self._wrapper.to_payload()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Function):
            return NotImplemented
        return self._wrapper == other._wrapper

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Function({self._wrapper!r})"


VarQuantity._sealed = True
