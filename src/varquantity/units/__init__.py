"""
Unit symbols and the quantity-expression parser.

>>> from varquantity.units import DEFAULT_REGISTRY, parse_quantity
>>> parse_quantity("2 mOhm", DEFAULT_REGISTRY).value
0.002
"""

from varquantity.units.parser import extract_unit_expr, parse_quantity
from varquantity.units.prefixes import PREFIXES, Prefix
from varquantity.units.registry import (
    DEFAULT_REGISTRY,
    UnitNamespace,
    UnitsRegistry,
    normalize_symbol,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "PREFIXES",
    "Prefix",
    "UnitNamespace",
    "UnitsRegistry",
    "extract_unit_expr",
    "normalize_symbol",
    "parse_quantity",
]
