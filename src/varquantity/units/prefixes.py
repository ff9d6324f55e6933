"""SI prefixes used to synthesize units such as ``mT``, ``kW`` or ``µm``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Prefix:
    symbol: str
    factor: float
    name: str


PREFIXES: Tuple[Prefix, ...] = (
    Prefix("Y", 1e24, "yotta"),
    Prefix("Z", 1e21, "zetta"),
    Prefix("E", 1e18, "exa"),
    Prefix("P", 1e15, "peta"),
    Prefix("T", 1e12, "tera"),
    Prefix("G", 1e9, "giga"),
    Prefix("M", 1e6, "mega"),
    Prefix("k", 1e3, "kilo"),
    Prefix("h", 1e2, "hecto"),
    Prefix("da", 1e1, "deca"),
    Prefix("d", 1e-1, "deci"),
    Prefix("c", 1e-2, "centi"),
    Prefix("m", 1e-3, "milli"),
    Prefix("µ", 1e-6, "micro"),
    Prefix("n", 1e-9, "nano"),
    Prefix("p", 1e-12, "pico"),
    Prefix("f", 1e-15, "femto"),
    Prefix("a", 1e-18, "atto"),
    Prefix("z", 1e-21, "zepto"),
    Prefix("y", 1e-24, "yocto"),
)
