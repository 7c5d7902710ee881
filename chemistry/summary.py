from __future__ import annotations
from typing import List, Dict, Tuple, Optional, Any, Sequence
from collections import defaultdict, Counter
import logging

from .compounds import lookup_compound
from .constants import OCTET
from .formula import compute_formula

logger = logging.getLogger(__name__)


# -----------------------
# Connected components
# -----------------------

def extract_connected_components(atoms: Sequence, bonds: Sequence) -> List[Tuple[list, list]]:
    """
    Split the sandbox into separate molecules.
    Returns a list of (atoms_in_component, bonds_in_component), ordered by the
    first atom of each component in `atoms`; atoms keep their input order.
    """
    adj: Dict[str, List[str]] = defaultdict(list)
    for bond in bonds:
        adj[bond.from_id].append(bond.to_id)
        adj[bond.to_id].append(bond.from_id)

    visited = set()
    components: List[Tuple[list, list]] = []

    for atom in atoms:
        if atom.uid in visited:
            continue
        stack = [atom.uid]
        comp_uids = set()
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            comp_uids.add(current)
            stack.extend(n for n in adj.get(current, []) if n not in visited)
        comp_atoms = [a for a in atoms if a.uid in comp_uids]
        comp_bonds = [b for b in bonds if b.from_id in comp_uids and b.to_id in comp_uids]
        components.append((comp_atoms, comp_bonds))

    return components


# -----------------------
# Lewis dots
# -----------------------

def lewis_dots(element) -> Dict[str, Any]:
    """
    Dot-diagram data for one atom: eight dot positions, the first
    min(valence, 8) of them filled.
    """
    filled = min(element.valence_electrons, OCTET)
    return {
        "symbol": element.symbol,
        "valence_electrons": element.valence_electrons,
        "dots": [i < filled for i in range(OCTET)],
    }


# -----------------------
# Summary
# -----------------------

def describe_molecule(atoms: Sequence, bonds: Sequence, formula: Optional[str] = None) -> Dict[str, Any]:
    """
    Explain the current sandbox in a panel-friendly way:
    {
        "formula": "H2O",
        "num_atoms": 3,
        "num_bonds": 2,
        "bond_types": {"covalent": 2},
        "compound": {"name": ..., "geometry": ..., "bond_angle": ...} or None,
        "molecules": ["H2O"],
        "lewis": [{"symbol": "H", "valence_electrons": 1, "dots": [...]}, ...],
    }
    """
    atoms = list(atoms)
    bonds = list(bonds)
    if formula is None:
        formula = compute_formula(atoms)

    compound = lookup_compound(formula)
    bond_types = Counter(b.bond_type for b in bonds)
    molecules = [compute_formula(comp_atoms) for comp_atoms, _ in extract_connected_components(atoms, bonds)]

    return {
        "formula": formula,
        "num_atoms": len(atoms),
        "num_bonds": len(bonds),
        "bond_types": dict(bond_types),
        "compound": compound.to_dict() if compound is not None else None,
        "molecules": molecules,
        "lewis": [lewis_dots(a.element) for a in atoms],
    }
