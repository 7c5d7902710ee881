from __future__ import annotations
from pathlib import Path
import json
import logging
from typing import Dict, List, Optional, Union

from .constants import COMPOUNDS_JSON
from .formula import formula_from_counts, parse_formula

logger = logging.getLogger(__name__)

# In-memory cache, canonical formula -> KnownCompound
KNOWN_COMPOUNDS: Dict[str, "KnownCompound"] = {}


class KnownCompound:
    """Display metadata for a recognised molecule."""

    def __init__(self, name: str, geometry: str, bond_angle: str):
        self.name = name
        self.geometry = geometry
        self.bond_angle = bond_angle

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "geometry": self.geometry, "bond_angle": self.bond_angle}

    def __eq__(self, other) -> bool:
        return isinstance(other, KnownCompound) and other.to_dict() == self.to_dict()

    def __repr__(self) -> str:
        return f"<KnownCompound {self.name} geometry={self.geometry} angle={self.bond_angle}>"


def load_compounds(path: Union[Path, str] = None) -> Dict[str, KnownCompound]:
    """
    Load compounds.json (a mapping of canonical formula -> metadata) into
    KNOWN_COMPOUNDS. Keys must already be in compute_formula's canonical form.
    """
    global KNOWN_COMPOUNDS
    if path is None:
        path = COMPOUNDS_JSON

    try:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        compounds = {
            formula: KnownCompound(row["name"], row["geometry"], row["bond_angle"])
            for formula, row in raw.items()
        }
    except Exception as e:
        logger.exception(f"Failed to load compound registry from {path}: {e}")
        raise RuntimeError(f"Failed to load compound registry from {path}") from e

    for formula in compounds:
        if not is_canonical(formula):
            logger.warning(f"Compound key {formula!r} is not a canonical formula and will never match")

    KNOWN_COMPOUNDS = compounds
    logger.info(f"Loaded {len(KNOWN_COMPOUNDS)} known compounds from {path}")
    return KNOWN_COMPOUNDS


def lookup_compound(formula: str) -> Optional[KnownCompound]:
    """Exact, case-sensitive lookup. Returns None for unknown formulas."""
    if not KNOWN_COMPOUNDS:
        load_compounds()
    return KNOWN_COMPOUNDS.get(formula)


def known_formulas() -> List[str]:
    if not KNOWN_COMPOUNDS:
        load_compounds()
    return list(KNOWN_COMPOUNDS.keys())


def is_canonical(formula: str) -> bool:
    """True when formula is exactly what compute_formula would produce for it."""
    try:
        return formula_from_counts(parse_formula(formula)) == formula
    except ValueError:
        return False
