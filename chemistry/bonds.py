from __future__ import annotations
from typing import Dict, Any, List, Sequence
import logging

from .constants import (
    BOND_DISTANCE_THRESHOLD,
    OCTET,
    MIN_BOND_ORDER,
    MAX_BOND_ORDER,
    BOND_COVALENT,
    BOND_IONIC,
    BOND_METALLIC,
    CATEGORY_NOBLE_GAS,
)

logger = logging.getLogger(__name__)

# -----------------------
# Bond object
# -----------------------


class Bond:
    """
    A bond between two placed atoms, derived from one snapshot of the sandbox.

    Bonds hold atom ids rather than atom references and are never updated:
    any change to the atom set means a fresh detect_bonds() call.
    """

    def __init__(self, from_id: str, to_id: str, bond_type: str, order: int = 1):
        """
        Args:
            from_id (str): id of the atom that comes first in the input sequence.
            to_id (str): id of the other atom.
            bond_type (str): "covalent", "ionic" or "metallic".
            order (int): Bond order (1=single, 2=double, 3=triple).
        """
        if from_id == to_id:
            raise ValueError("Cannot bond an atom to itself")
        self.from_id = from_id
        self.to_id = to_id
        self.bond_type = bond_type
        self.order = order

    def involves(self, uid: str) -> bool:
        return uid in (self.from_id, self.to_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_id, "to": self.to_id, "type": self.bond_type, "order": self.order}

    def __eq__(self, other) -> bool:
        return isinstance(other, Bond) and other.to_dict() == self.to_dict()

    def __repr__(self) -> str:
        return f"<Bond {self.from_id}-{self.to_id} type={self.bond_type} order={self.order}>"


# -----------------------
# Pair heuristics
# -----------------------

def classify_bond_type(element_a, element_b) -> str:
    """
    Bond type from metal flags alone: metal+metal is metallic, a mixed pair
    is ionic, two non-metals are covalent. Electronegativity is not consulted.
    """
    if element_a.is_metal and element_b.is_metal:
        return BOND_METALLIC
    if element_a.is_metal != element_b.is_metal:
        return BOND_IONIC
    return BOND_COVALENT


def needed_pairs(element) -> int:
    """Electron pairs an element wants to complete its octet, floor((8 - ve) / 2)."""
    return (OCTET - element.valence_electrons) // 2


def estimate_bond_order(element_a, element_b) -> int:
    """
    Octet heuristic bond order, clamped to [1, 3].

    Computed for the pair in isolation: an atom's other bonds do not use up
    any budget, so a hydrogen can carry an order-3 bond to each neighbour.
    """
    shared_pairs = min(needed_pairs(element_a), needed_pairs(element_b))
    return max(MIN_BOND_ORDER, min(MAX_BOND_ORDER, shared_pairs))


def atom_distance(atom_a, atom_b) -> float:
    return atom_a.distance_to(atom_b)


# -----------------------
# Bond detection
# -----------------------

def detect_bonds(atoms: Sequence) -> List[Bond]:
    """
    Compute the full bond list for the given atoms.

    Every unordered pair closer than BOND_DISTANCE_THRESHOLD yields one Bond,
    directed from the earlier atom in `atoms` to the later one. The result
    depends only on the (id, element, position) of each atom.
    """
    atoms = list(atoms)
    bonds: List[Bond] = []
    for i, a in enumerate(atoms):
        for b in atoms[i + 1:]:
            dist = atom_distance(a, b)
            if dist >= BOND_DISTANCE_THRESHOLD:
                continue
            bond = Bond(
                a.uid,
                b.uid,
                classify_bond_type(a.element, b.element),
                estimate_bond_order(a.element, b.element),
            )
            logger.debug(f"Detected {bond!r} at distance {dist:.2f}")
            bonds.append(bond)
    return bonds


# -----------------------
# Validation
# -----------------------

def validate_bond(element_a, element_b) -> Dict[str, Any]:
    """
    Advisory check that two elements can bond at all.

    Returns {"valid": False, "reason": ...} when either element is a noble
    gas, else {"valid": True, "reason": ""}. Never raises; whether to block a
    placement is up to the caller.
    """
    for element in (element_a, element_b):
        if element.category == CATEGORY_NOBLE_GAS:
            return {
                "valid": False,
                "reason": f"{element.name} is a noble gas and rarely forms bonds (stable octet).",
            }
    return {"valid": True, "reason": ""}
