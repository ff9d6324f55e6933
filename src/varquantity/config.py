"""
varquantity.config
==================

Loading named variable quantities from YAML configuration files.

A configuration file maps property names to payloads::

    resistivity: 1/(2.0e6) Ohm*m
    iron_losses:
      Polynomial:
        coefficients: [0.5 W/T^2, 0.0 W/T, 0.0 W]

The caller decides which kind each name must have, so a typo in a unit or a
function with the wrong output dimension is reported when the file is read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from varquantity.core.errors import DeserializationError
from varquantity.functions.base import FunctionRegistry
from varquantity.variable import VarQuantity

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load YAML from path using safe loader.

    Normalization:
      - empty YAML -> {}
      - top-level must be a dict (mapping); otherwise error
    """
    path = Path(path).expanduser().resolve()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DeserializationError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise TypeError(f"Top-level YAML must be a mapping/dict: {path}")

    return data


def load_quantities(
    path: Path,
    kinds: Mapping[str, Any],
    registry: Optional[FunctionRegistry] = None,
) -> Dict[str, VarQuantity[Any]]:
    """
    Read ``name -> payload`` entries and build one `VarQuantity` per name.

    Parameters
    ----------
    path : Path
        YAML file with a top-level mapping.
    kinds : Mapping[str, type]
        Required kind for every expected name, e.g. ``{"resistivity":
        ElectricalResistivity}``.
    registry : FunctionRegistry, optional
        Registry used to resolve function tags.

    Raises
    ------
    KeyError
        If the file lacks names listed in ``kinds`` or holds names that are
        not listed. All offending names are reported at once.
    DeserializationError
        If an entry cannot be built; the message names the entry.
    """
    data = load_yaml(path)

    missing_entries = sorted(set(kinds) - set(data))
    missing_kinds = sorted(set(data) - set(kinds))
    if missing_entries or missing_kinds:
        parts = []
        if missing_entries:
            parts.append(f"missing entries: {', '.join(missing_entries)}")
        if missing_kinds:
            parts.append(f"no kind given for: {', '.join(missing_kinds)}")
        raise KeyError(f"{path}: {'; '.join(parts)}")

    out: Dict[str, VarQuantity[Any]] = {}
    for name, payload in data.items():
        try:
            out[name] = VarQuantity.from_payload(kinds[name], payload, registry)
        except DeserializationError as e:
            raise DeserializationError(f"{path}: entry {name!r}: {e}") from e
        logger.debug("loaded %r from %s: %r", name, path, out[name])

    logger.info("Loaded %d quantities from %s", len(out), path)
    return out
