from __future__ import annotations
from typing import Dict, List, Sequence
import logging

from .compounds import lookup_compound
from .constants import (
    BOND_DISTANCE_THRESHOLD,
    BOND_COVALENT,
    BOND_IONIC,
    SEVERITY_INFO,
    SEVERITY_SUCCESS,
    SEVERITY_WARNING,
)

logger = logging.getLogger(__name__)

EMPTY_SANDBOX_MESSAGE = "Drag atoms from the periodic table into the sandbox to begin building molecules!"


def _result(message: str, severity: str) -> Dict[str, str]:
    return {"message": message, "severity": severity}


def bond_types_present(bonds: Sequence) -> List[str]:
    """Distinct bond types in first-seen order."""
    return list(dict.fromkeys(b.bond_type for b in bonds))


def generate_feedback(atoms: Sequence, bonds: Sequence, formula: str) -> Dict[str, str]:
    """
    Classify the current sandbox into a status message and a severity.

    Rules are tried in order and the first match wins:
      1. empty sandbox
      2. a single atom
      3. formula is a known compound (beats every structural rule below)
      4. several atoms but no bonds
      5. ionic bonds only
      6. covalent bonds only, with a triple or else double bond count
      7. anything else, including purely metallic bonding
    """
    atoms = list(atoms)
    if len(atoms) == 0:
        return _result(EMPTY_SANDBOX_MESSAGE, SEVERITY_INFO)

    if len(atoms) == 1:
        element = atoms[0].element
        return _result(
            f"{element.name} added. Add more atoms to form bonds. Valence electrons: {element.valence_electrons}",
            SEVERITY_INFO,
        )

    compound = lookup_compound(formula)
    if compound is not None:
        types = " & ".join(bond_types_present(bonds))
        return _result(
            f"{compound.name} ({formula}) - {types} bonding | "
            f"Geometry: {compound.geometry} | Bond Angle: {compound.bond_angle}",
            SEVERITY_SUCCESS,
        )

    if len(bonds) == 0:
        return _result(
            f"{len(atoms)} atoms present but no bonds detected. "
            f"Bring atoms closer together (within {BOND_DISTANCE_THRESHOLD:g}px).",
            SEVERITY_WARNING,
        )

    ionic = [b for b in bonds if b.bond_type == BOND_IONIC]
    covalent = [b for b in bonds if b.bond_type == BOND_COVALENT]

    if ionic and not covalent:
        return _result(
            f"Formula: {formula} - Ionic bonding detected (metal + nonmetal electron transfer).",
            SEVERITY_INFO,
        )

    if covalent and not ionic:
        double = sum(1 for b in bonds if b.order == 2)
        triple = sum(1 for b in bonds if b.order == 3)
        desc = "Covalent bonding (electron sharing)"
        if triple:
            desc += f" | {triple} triple bond(s)"
        elif double:
            desc += f" | {double} double bond(s)"
        return _result(f"Formula: {formula} - {desc}.", SEVERITY_INFO)

    return _result(
        f"Formula: {formula} - {len(bonds)} bond(s) detected (mixed ionic/covalent).",
        SEVERITY_INFO,
    )
