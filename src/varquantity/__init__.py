"""
varquantity: physical quantities whose value may depend on other quantities.

A property such as a resistivity or a loss coefficient is either a constant
or a function of influencing factors (temperature, frequency, ...). Both are
represented by `VarQuantity`, and every function is checked for dimensional
consistency when it is built. This module exposes a minimal, stable public
API. The units registry is imported lazily to avoid import-time side effects.
"""

import logging
from importlib import metadata as _metadata


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to a default for local dev.
try:
    __version__ = _metadata.version("varquantity")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

logging.getLogger(__name__).addHandler(logging.NullHandler())

from varquantity.core.errors import (  # noqa: E402
    ContractViolationError,
    DeserializationError,
    DimensionMismatchError,
    InvalidRangeError,
)
from varquantity.core.quantity import DynQuantity  # noqa: E402
from varquantity.functions import (  # noqa: E402
    Clamped,
    Exponential,
    ExpTerm,
    FirstOrderTaylor,
    Linear,
    Polynomial,
    QuantityFunction,
    filter_unary_function,
    register_function,
)
from varquantity.variable import Constant, Function, VarQuantity  # noqa: E402
from varquantity.wrapper import FunctionWrapper  # noqa: E402

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "Clamped",
    "Constant",
    "ContractViolationError",
    "DeserializationError",
    "DimensionMismatchError",
    "DynQuantity",
    "ExpTerm",
    "Exponential",
    "FirstOrderTaylor",
    "Function",
    "FunctionWrapper",
    "InvalidRangeError",
    "Linear",
    "Polynomial",
    "QuantityFunction",
    "VarQuantity",
    "filter_unary_function",
    "register_function",
]

from typing import TYPE_CHECKING, Any  # noqa: E402

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from varquantity.units.registry import UnitsRegistry
# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid import-time side-effects / circular imports.
    from varquantity.units.registry import DEFAULT_REGISTRY  # local import
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing 'u' will construct a namespace from the
    package's default registry on first use.
    """
    if name == "u":
        return _get_default_registry().as_namespace()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["u"])
