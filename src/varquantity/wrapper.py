"""
varquantity.wrapper
===================

`FunctionWrapper` binds a `QuantityFunction` to a statically typed kind.

On construction the function is evaluated once with no influencing factors
and its output dimension is compared with the kind's dimension. That single
sample is all the wrapper can prove. If a later call returns a different
dimension the function object is broken: the wrapper logs at ``CRITICAL`` and
raises `ContractViolationError` instead of returning a meaningless value.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Generic, Optional, Type, TypeVar

from varquantity.core.errors import (
    ContractViolationError,
    DeserializationError,
    DimensionMismatchError,
)
from varquantity.core.kinds import describe_kind, kind_from_dyn, unit_from_type
from varquantity.functions.base import (
    FunctionPayload,
    FunctionRegistry,
    InfluencingFactors,
    QuantityFunction,
    function_from_payload,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FunctionWrapper(Generic[T]):
    """
    A quantity function whose output is converted to ``kind``.

    Parameters
    ----------
    kind : type
        A `QuantityKind` subclass such as `Power`, or ``float`` for a
        dimensionless result.
    function : QuantityFunction
        The wrapped function. The wrapper owns it from now on.

    Raises
    ------
    DimensionMismatchError
        If ``function([])`` does not have the dimension of ``kind``.
    """

    __slots__ = ("_kind", "_function")

    def __init__(self, kind: Type[T], function: QuantityFunction) -> None:
        if not isinstance(function, QuantityFunction):
            raise TypeError(f"expected a QuantityFunction, got {type(function).__name__}")
        expected = unit_from_type(kind)
        found = function.call([]).dim
        if found != expected:
            logger.debug(
                "rejected %r for %s: output dimension %r", function, describe_kind(kind), found
            )
            raise DimensionMismatchError(
                expected, found, f"{type(function).__name__} cannot produce {kind.__name__}"
            )
        self._kind = kind
        self._function = function
        logger.debug("wrapped %r as %s", function, describe_kind(kind))

    @property
    def kind(self) -> Type[T]:
        return self._kind

    @property
    def inner(self) -> QuantityFunction:
        return self._function

    def call(self, influencing_factors: InfluencingFactors = ()) -> T:
        out = self._function.call(influencing_factors)
        try:
            return kind_from_dyn(self._kind, out)
        except DimensionMismatchError as e:
            logger.critical(
                "quantity function %r returned %s for %s; its output dimension "
                "must not depend on the influencing factors",
                self._function, out, describe_kind(self._kind),
            )
            raise ContractViolationError(
                f"{type(self._function).__name__} violated its output dimension contract: {e}"
            ) from e

    __call__ = call

    def clone(self) -> "FunctionWrapper[T]":
        return copy.deepcopy(self)

    def to_payload(self) -> FunctionPayload:
        return self._function.to_payload()

    @classmethod
    def from_payload(
        cls, kind: Type[T], payload: Any, registry: Optional[FunctionRegistry] = None
    ) -> "FunctionWrapper[T]":
        """Decode a tagged function payload and run the construction self-test.

        A failed self-test is reported as `DeserializationError`.
        """
        function = function_from_payload(payload, registry)
        try:
            return cls(kind, function)
        except DimensionMismatchError as e:
            raise DeserializationError(str(e)) from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionWrapper):
            return NotImplemented
        return self._kind is other._kind and self._function == other._function

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FunctionWrapper({self._kind.__name__}, {self._function!r})"
