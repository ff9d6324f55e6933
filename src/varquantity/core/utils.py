"""
varquantity.core.utils
======================

Utility functions for formatting dimensions as readable unit strings.

Two flavours are provided:

- ``format_dim`` produces a display string in scientific style
  (e.g. ``'kg·m²/s³'``), used in error messages and ``str()`` output.
- ``format_dim_expr`` produces an ASCII expression the quantity parser reads
  back exactly (e.g. ``'kg*m^2*s^-3'``), used when persisting quantities.
"""

from __future__ import annotations

from typing import List, Sequence

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")

# indices: L=0 M=1 T=2 I=3 Θ=4 N=5 J=6
_LABELS: Sequence[str] = ("m", "kg", "s", "A", "K", "mol", "cd")
_ORDER: Sequence[int] = (1, 0, 2, 3, 4, 5, 6)  # M, L, T, I, Θ, N, J  (fixed order)


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def format_dim(dim: Sequence[int]) -> str:
    """
    Turn a dimension tuple (L,M,T,I,Θ,N,J) into 'kg·m/s²' style.
    Conventional order: M, L, T, I, Θ, N, J.
    """
    num: List[str] = []
    den: List[str] = []
    for i in _ORDER:
        e = dim[i]
        if e > 0:
            num.append(_LABELS[i] + _sup(e))
        elif e < 0:
            den.append(_LABELS[i] + _sup(-e))

    numerator = "·".join(num) if num else "1"
    denominator = "·".join(den)
    return f"{numerator}/{denominator}" if denominator else numerator


def format_dim_expr(dim: Sequence[int]) -> str:
    """
    Turn a dimension tuple into a parser-compatible product of base SI
    symbols, e.g. (2,1,-3,-1,0,0,0) -> 'kg*m^2*s^-3*A^-1'.

    Dimensionless input yields an empty string.
    """
    parts: List[str] = []
    for i in _ORDER:
        e = dim[i]
        if e == 1:
            parts.append(_LABELS[i])
        elif e != 0:
            parts.append(f"{_LABELS[i]}^{e}")
    return "*".join(parts)
