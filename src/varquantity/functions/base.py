"""
varquantity.functions.base
==========================

The quantity function contract and its persistence registry.

A *quantity function* maps a list of influencing factors (``DynQuantity``
values such as a temperature or a frequency) to a single ``DynQuantity``.
Its output dimension must be the same for every possible input list,
including the empty one. That cannot be checked exhaustively; wrappers sample
it once with an empty input list and treat any later deviation as a defect
of the function object.

Concrete functions are persisted in an externally tagged form::

    {"Linear": {"slope": "2.0 kg*m^2*s^-3*A^-1", "base_value": 0.5}}

The tag is looked up in a `FunctionRegistry`. Third parties add their own
functions with the `register_function` decorator without touching this
package.
"""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from varquantity.core.dimensions import Dimension
from varquantity.core.errors import DeserializationError
from varquantity.core.kinds import QuantityKind
from varquantity.core.quantity import DynQuantity

logger = logging.getLogger(__name__)

R = TypeVar("R")
F = TypeVar("F", bound=Type["QuantityFunction"])

InfluencingFactors = Sequence[DynQuantity]
FunctionPayload = Dict[str, Dict[str, Any]]


def filter_unary_function(
    influencing_factors: InfluencingFactors,
    match_for: Dimension,
    with_matched: Callable[[DynQuantity], R],
    no_match: Callable[[], R],
) -> R:
    """Dispatch on the first influencing factor whose dimension is ``match_for``.

    The factors are scanned in order; the first match is passed to
    ``with_matched``, later matches are ignored. If nothing matches,
    ``no_match`` is called without arguments.

    >>> from varquantity.core.dimensions import TEMPERATURE
    >>> filter_unary_function(
    ...     [DynQuantity(300.0, TEMPERATURE)], TEMPERATURE,
    ...     lambda t: t.value, lambda: 0.0)
    300.0
    """
    for factor in influencing_factors:
        if factor.dim == match_for:
            return with_matched(factor)
    return no_match()


def as_quantity(value: Any) -> DynQuantity:
    """Coerce a coefficient (DynQuantity, kind value, number or unit string)."""
    if isinstance(value, QuantityKind):
        return value.to_dyn()
    return DynQuantity.from_payload(value)


class QuantityFunction(ABC):
    """Base class of all quantity functions.

    Subclasses implement `call`. Functions that are meant to be persisted
    also implement `to_fields`/`from_fields` and are registered with
    `register_function`.

    Instances must not change after construction: evaluation may happen from
    several threads at once and `clone` is expected to produce an equal,
    independent object.
    """

    __slots__ = ()

    #: Attribute names compared by ``==``.
    _eq_fields: ClassVar[Tuple[str, ...]] = ()

    @abstractmethod
    def call(self, influencing_factors: InfluencingFactors) -> DynQuantity:
        """Evaluate the function for the given influencing factors."""

    def __call__(self, influencing_factors: InfluencingFactors = ()) -> DynQuantity:
        return self.call(influencing_factors)

    def clone(self):
        return copy.deepcopy(self)

    # --- persistence ---
    def to_fields(self) -> Dict[str, Any]:
        """Plain-data fields of this function (without the tag)."""
        raise NotImplementedError(f"{type(self).__name__} does not support persistence")

    @classmethod
    def from_fields(
        cls, fields: Mapping[str, Any], registry: Optional["FunctionRegistry"] = None
    ) -> "QuantityFunction":
        """Rebuild a function from `to_fields` output. The constructor checks run again."""
        return cls(**fields)

    def to_payload(self) -> FunctionPayload:
        tag = type(self).__dict__.get("tag")
        if tag is None:
            raise TypeError(
                f"{type(self).__name__} is not registered; decorate it with @register_function"
            )
        return {tag: self.to_fields()}

    # --- comparison ---
    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._eq_fields)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        args = ", ".join(f"{f.lstrip('_')}={getattr(self, f)!r}" for f in self._eq_fields)
        return f"{type(self).__name__}({args})"


class FunctionRegistry:
    """Thread-safe mapping of persistence tags to `QuantityFunction` classes."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._classes: Dict[str, Type[QuantityFunction]] = {}

    def __contains__(self, tag: str) -> bool:
        return self.has(tag)

    def register(
        self, cls: Type[QuantityFunction], tag: Optional[str] = None, replace: bool = False
    ) -> Type[QuantityFunction]:
        if not (isinstance(cls, type) and issubclass(cls, QuantityFunction)):
            raise TypeError(f"{cls!r} is not a QuantityFunction subclass")
        tag = tag or cls.__dict__.get("tag") or cls.__name__
        with self._lock:
            existing = self._classes.get(tag)
            if existing is not None and existing is not cls and not replace:
                raise ValueError(
                    f"Cannot register function tag '{tag}': "
                    f"already taken by {existing.__module__}.{existing.__qualname__}."
                )
            self._classes[tag] = cls
        if "tag" not in cls.__dict__:
            cls.tag = tag
        logger.debug("registered quantity function %s under tag %r", cls.__qualname__, tag)
        return cls

    def has(self, tag: str) -> bool:
        with self._lock:
            return tag in self._classes

    def get(self, tag: str) -> Type[QuantityFunction]:
        with self._lock:
            cls = self._classes.get(tag)
        if cls is None:
            raise ValueError(f"Unknown quantity function tag: {tag!r}")
        return cls

    def all(self) -> Mapping[str, Type[QuantityFunction]]:
        with self._lock:
            return dict(self._classes)


DEFAULT_FUNCTION_REGISTRY = FunctionRegistry()


def register_function(
    tag: Optional[str] = None,
    registry: FunctionRegistry = DEFAULT_FUNCTION_REGISTRY,
    replace: bool = False,
) -> Callable[[F], F]:
    """Class decorator registering a quantity function for persistence.

    >>> @register_function("VariableResistance")
    ... class VariableResistance(QuantityFunction):
    ...     ...
    """

    def decorator(cls: F) -> F:
        registry.register(cls, tag, replace=replace)
        return cls

    return decorator


def function_from_payload(
    payload: Any, registry: Optional[FunctionRegistry] = None
) -> QuantityFunction:
    """Decode ``{tag: fields}`` into a function instance.

    Raises
    ------
    DeserializationError
        If the payload is malformed, the tag is unknown or the function's own
        construction checks fail.
    """
    registry = registry if registry is not None else DEFAULT_FUNCTION_REGISTRY
    if not isinstance(payload, Mapping) or len(payload) != 1:
        raise DeserializationError(
            f"expected a single-key mapping {{tag: fields}}, got {payload!r}"
        )
    ((tag, fields),) = payload.items()
    try:
        cls = registry.get(tag)
    except ValueError as e:
        raise DeserializationError(str(e)) from e
    if fields is None:
        fields = {}
    if not isinstance(fields, Mapping):
        raise DeserializationError(f"fields of {tag!r} must be a mapping, got {fields!r}")
    try:
        return cls.from_fields(fields, registry=registry)
    except DeserializationError:
        raise
    except (ValueError, TypeError, KeyError) as e:
        raise DeserializationError(f"cannot build {tag!r}: {e}") from e


def quantity_field(fields: Mapping[str, Any], name: str) -> DynQuantity:
    """Read a persisted coefficient; a bare number means dimensionless."""
    if name not in fields:
        raise KeyError(f"missing field {name!r}")
    return DynQuantity.from_payload(fields[name])


__all__ = [
    "DEFAULT_FUNCTION_REGISTRY",
    "FunctionRegistry",
    "QuantityFunction",
    "as_quantity",
    "filter_unary_function",
    "function_from_payload",
    "quantity_field",
    "register_function",
]
