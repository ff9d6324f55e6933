"""
Quantity functions: the `QuantityFunction` contract, its persistence registry
and the built-in unary functions.

Importing this package registers the built-in tags (``Linear``,
``Polynomial``, ``FirstOrderTaylor``, ``Exponential``, ``Clamped``) in
`DEFAULT_FUNCTION_REGISTRY`.
"""

from varquantity.functions.base import (
    DEFAULT_FUNCTION_REGISTRY,
    FunctionRegistry,
    QuantityFunction,
    filter_unary_function,
    function_from_payload,
    register_function,
)
from varquantity.functions.clamped import Clamped
from varquantity.functions.exponential import Exponential, ExpTerm
from varquantity.functions.first_order_taylor import FirstOrderTaylor
from varquantity.functions.linear import Linear
from varquantity.functions.polynomial import Polynomial

__all__ = [
    "DEFAULT_FUNCTION_REGISTRY",
    "Clamped",
    "ExpTerm",
    "Exponential",
    "FirstOrderTaylor",
    "FunctionRegistry",
    "Linear",
    "Polynomial",
    "QuantityFunction",
    "filter_unary_function",
    "function_from_payload",
    "register_function",
]
