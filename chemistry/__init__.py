# chemistry/__init__.py
from .elements_data import Element, get_element, get_element_by_number, all_elements, periodic_grid, load_elements
from .compounds import KnownCompound, lookup_compound, load_compounds
from .atoms import PlacedAtom
from .formula import compute_formula, parse_formula
from .bonds import Bond, detect_bonds, validate_bond
from .feedback import generate_feedback
from .summary import describe_molecule

__all__ = [
    "Element", "get_element", "get_element_by_number", "all_elements", "periodic_grid", "load_elements",
    "KnownCompound", "lookup_compound", "load_compounds",
    "PlacedAtom", "compute_formula", "parse_formula",
    "Bond", "detect_bonds", "validate_bond",
    "generate_feedback", "describe_molecule",
]
