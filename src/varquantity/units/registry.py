"""
varquantity.units.registry
==========================

Thread-safe registry of named units used when parsing quantity expressions
such as ``"2 ohm*m"`` or ``"1 mT"``.

- Data-driven registration of SI base/derived units.
- Normalization that handles ASCII fallbacks and Unicode NFC.
- Lazy synthesis of prefixed units with anti-stacking checks.
- Support for aliases (e.g., "ohm" → "Ω", "Ohm" → "Ω").
- Public API: `register`, `register_alias`, `get`, `has`, `all`.
- Multiple registries can coexist (e.g. for testing).
"""
from __future__ import annotations

import logging
import re
import threading
import unicodedata
from typing import Dict, Iterable, Mapping, Optional, Tuple

from varquantity.core.dimensions import (
    AMOUNT,
    CAPACITANCE,
    CATALYTIC,
    CHARGE,
    CONDUCTANCE,
    CURRENT,
    DIM_0,
    DOSE,
    ENERGY,
    FLUX,
    FLUX_DENSITY,
    FORCE,
    FREQUENCY,
    ILLUMINANCE,
    INDUCTANCE,
    LENGTH,
    LUMINOUS,
    MASS,
    POWER,
    PRESSURE,
    RESISTANCE,
    TEMPERATURE,
    TIME,
    VOLTAGE,
)
from varquantity.core.unit import Unit
from varquantity.units.prefixes import PREFIXES

logger = logging.getLogger(__name__)

# Ordered list of prefix symbols by descending length for robust matching
_PREFIX_SYMBOLS_DESC = tuple(sorted((p.symbol for p in PREFIXES), key=len, reverse=True))
_PREFIX_FACTORS: Mapping[str, float] = {p.symbol: p.factor for p in PREFIXES}

_OHM_RE = re.compile(r"(?i)ohm")


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Unicode normalize to NFC (composed forms like "µ").
    - Replace ASCII leading 'u' micro with Greek 'µ' **only** at start.
    - Map any spelling of 'ohm' to the canonical 'Ω'.
    - Strip surrounding whitespace.
    """
    if not s:
        return s

    s = s.strip()
    s = unicodedata.normalize("NFC", s)
    # U+00B5 (micro sign) and U+03BC (greek mu) both mean micro
    s = s.replace("μ", "µ")

    if s.startswith("u"):
        s = "µ" + s[1:]

    return _OHM_RE.sub("Ω", s)


class UnitsRegistry:
    """Thread-safe registry for `Unit` objects with SI prefix synthesis.

    The registry resolves atomic symbols (possibly prefixed). Compound
    expressions like "W/m^2" are handled by `varquantity.units.parser`.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, Unit] = {}
        self._aliases: Dict[str, str] = {}
        self._non_prefixable: set[str] = set()

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    def set_non_prefixable(self, symbols: Iterable[str]) -> None:
        """Mark unit symbols that must not accept SI prefixes (e.g., 'kg', 'min')."""
        with self._lock:
            self._non_prefixable = {normalize_symbol(s) for s in symbols}

    def is_non_prefixable(self, symbol: str) -> bool:
        return normalize_symbol(symbol) in self._non_prefixable

    # -------------------------- public API ---------------------------------
    def register(self, unit: Unit, replace: bool = False) -> None:
        """Register (or overwrite if replace is True) a `Unit` under its name."""
        with self._lock:
            if not replace:
                if unit.name in self._units:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "a unit with this name already exists."
                    )
                if unit.name in self._aliases:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "an alias with this name already exists."
                    )
            self._units[unit.name] = unit

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        norm_key = normalize_symbol(alias)
        literal_key = unicodedata.normalize("NFC", alias.strip())

        with self._lock:
            if canonical not in self._units:
                raise ValueError(f"Cannot register alias '{alias}': unknown unit '{canonical}'.")
            if not replace:
                for key in {literal_key, norm_key}:
                    if key in self._units and key != canonical:
                        raise ValueError(
                            f"Cannot register alias '{alias}' (which maps to '{key}'): "
                            f"a unit with the name '{key}' already exists."
                        )
            self._aliases[norm_key] = canonical
            self._aliases[literal_key] = canonical

    def has(self, symbol: str) -> bool:
        try:
            self.get(symbol)
            return True
        except ValueError:
            return False

    def get(self, symbol: str) -> Unit:
        """Lookup a unit by symbol. If missing, try to synthesize via SI prefix.

        Raises `ValueError` if unknown.
        """
        sym = normalize_symbol(symbol)
        with self._lock:
            target = self._aliases.get(sym)
            if target is not None:
                sym = target

            u = self._units.get(sym)
            if u is not None:
                return u

            synthesized = self._try_synthesize_prefixed(sym)
            if synthesized is not None:
                return synthesized

        raise ValueError(f"Unknown unit symbol: {symbol}")

    def all(self) -> Mapping[str, Unit]:
        with self._lock:
            return dict(self._units)

    def as_namespace(self) -> "UnitNamespace":
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    def _split_prefix(self, symbol: str) -> Tuple[Optional[str], str]:
        for p in _PREFIX_SYMBOLS_DESC:
            if symbol.startswith(p):
                return p, symbol[len(p):]
        return None, symbol

    def _looks_prefixed(self, symbol: str) -> bool:
        p, base = self._split_prefix(symbol)
        return p is not None and base in self._units

    def _try_synthesize_prefixed(self, sym: str) -> Optional[Unit]:
        prefix, base_sym = self._split_prefix(sym)
        if prefix is None or not base_sym:
            return None

        # aliases are allowed after a prefix ("mohm" -> "mΩ" is handled by normalize)
        base_sym = self._aliases.get(base_sym, base_sym)
        base = self._units.get(base_sym)
        if base is None:
            return None

        # Prevent stacked prefixes: base itself must not be prefixed
        if self._looks_prefixed(base_sym):
            return None

        if base_sym in self._non_prefixable:
            return None

        new_unit = Unit(sym, base.scale_to_si * _PREFIX_FACTORS[prefix], base.dim)
        self._units[sym] = new_unit
        logger.debug("synthesized prefixed unit %r from %r", sym, base_sym)
        return new_unit


class UnitNamespace:
    """Attribute-style access to a registry: ``u.mT``, ``u("W/m^2")``."""

    def __init__(self, reg: UnitsRegistry) -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def __call__(self, spec: str) -> Unit:
        from varquantity.units.parser import extract_unit_expr

        return extract_unit_expr(spec, self._reg)

    def __getattr__(self, name: str) -> Unit:
        try:
            return self._reg.get(name)
        except ValueError as e:
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._reg.all().keys()))


# ---------------------------------------------------------------------------
# Bootstrap a default registry with SI units
# ---------------------------------------------------------------------------

def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()

    base_units = (
        Unit("m",   1.0, LENGTH),       # length
        Unit("kg",  1.0, MASS),         # mass
        Unit("s",   1.0, TIME),         # time
        Unit("A",   1.0, CURRENT),      # electric current
        Unit("K",   1.0, TEMPERATURE),  # temperature
        Unit("mol", 1.0, AMOUNT),       # amount of substance
        Unit("cd",  1.0, LUMINOUS),     # luminous intensity
    )

    # Derived (symbol, scale_to_si, dim)
    derived_units = (
        ("rad", 1.0,  DIM_0),
        ("sr",  1.0,  DIM_0),
        ("g",   1e-3, MASS),
        ("Hz",  1.0,  FREQUENCY),
        ("N",   1.0,  FORCE),
        ("Pa",  1.0,  PRESSURE),
        ("J",   1.0,  ENERGY),
        ("W",   1.0,  POWER),
        ("C",   1.0,  CHARGE),
        ("V",   1.0,  VOLTAGE),
        ("F",   1.0,  CAPACITANCE),
        ("Ω",   1.0,  RESISTANCE),
        ("S",   1.0,  CONDUCTANCE),
        ("Wb",  1.0,  FLUX),
        ("T",   1.0,  FLUX_DENSITY),
        ("H",   1.0,  INDUCTANCE),
        ("lm",  1.0,  LUMINOUS),      # cd·sr, sr ≡ dimensionless
        ("lx",  1.0,  ILLUMINANCE),
        ("Bq",  1.0,  FREQUENCY),
        ("Gy",  1.0,  DOSE),
        ("Sv",  1.0,  DOSE),
        ("kat", 1.0,  CATALYTIC),
        ("min", 60.0,             TIME),
        ("h",   3600.0,           TIME),
        ("d",   24.0 * 3600.0,    TIME),
    )

    for u in base_units:
        reg.register(u)
    for sym, scale, dim in derived_units:
        reg.register(Unit(sym, scale, dim))

    reg.register_alias("minute", "min")
    reg.register_alias("hour", "h")
    reg.register_alias("day", "d")

    reg.set_non_prefixable(["kg", "min", "h", "d"])

    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


__all__ = [
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
]
