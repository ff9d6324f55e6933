"""
varquantity.core.errors
=======================

Exceptions raised by varquantity.

Construction and parsing failures are ordinary, recoverable ``ValueError``
subclasses. ``ContractViolationError`` is the exception: it reports a broken
quantity function and derives from ``AssertionError`` so that handlers for
recoverable errors do not catch it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from varquantity.core.utils import format_dim

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from varquantity.core.dimensions import Dimension


class DimensionMismatchError(ValueError):
    """Two dimensions that are required to be equal are not.

    Attributes
    ----------
    expected : Dimension
        The dimension that was required.
    found : Dimension
        The dimension that was actually encountered.
    """

    def __init__(self, expected: "Dimension", found: "Dimension", context: str = "") -> None:
        self.expected = expected
        self.found = found
        self.context = context
        msg = f"dimensions not equal: expected [{format_dim(expected)}], found [{format_dim(found)}]"
        if context:
            msg = f"{context}: {msg}"
        super().__init__(msg)


class InvalidRangeError(ValueError):
    """A clamping range is empty: the upper limit lies below the lower limit or a
    limit is NaN."""

    def __init__(self, lower_limit: float, upper_limit: float) -> None:
        self.lower_limit = lower_limit
        self.upper_limit = upper_limit
        super().__init__(
            f"upper limit ({upper_limit!r}) must not be smaller than the lower limit ({lower_limit!r})"
        )


class DeserializationError(ValueError):
    """A payload could not be turned into a quantity, function or variable quantity.

    The underlying cause (parse error, unknown tag, dimension mismatch, ...)
    is chained via ``__cause__``.
    """


class ContractViolationError(AssertionError):
    """A quantity function returned a different output dimension than it did
    during its construction self-test.

    This is a defect in the function object; the program is in an invalid
    state and must not continue with the returned value.
    """
