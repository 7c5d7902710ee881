from __future__ import annotations
import re
from collections import Counter
from typing import Dict, Iterable, List
import logging

from .elements_data import get_element

logger = logging.getLogger(__name__)

# ============================================================
#   Atoms -> canonical formula
# ============================================================


def count_symbols(atoms: Iterable) -> Dict[str, int]:
    """
    Count placements per element symbol. Ids, positions and order are ignored.
    """
    return dict(Counter(atom.element.symbol for atom in atoms))


def _is_metal(symbol: str) -> bool:
    element = get_element(symbol)
    if element is None:
        raise ValueError(f"Unknown element symbol: {symbol!r}")
    return element.is_metal


def hill_order(symbols: Iterable[str]) -> List[str]:
    """
    Modified Hill order: C first, then H, then the remaining symbols by plain
    string comparison, metals ahead of non-metals ('NaCl', 'CaCl2', 'Cl3P').

    The compound registry and quiz table are keyed in this order, which is
    why ammonia is 'H3N' and sulfur dioxide is 'O2S'; changing the order
    means rekeying both data files.
    """
    symbols = set(symbols)
    head = [s for s in ("C", "H") if s in symbols]
    rest = sorted(symbols - {"C", "H"})
    return head + [s for s in rest if _is_metal(s)] + [s for s in rest if not _is_metal(s)]


def formula_from_counts(counts: Dict[str, int]) -> str:
    """
    Render an element -> count mapping, omitting counts of 1.
    Ex: {'O': 1, 'H': 2} -> 'H2O'
    """
    return "".join(
        f"{sym}{counts[sym] if counts[sym] > 1 else ''}"
        for sym in hill_order(counts)
        if counts[sym] > 0
    )


def compute_formula(atoms: Iterable) -> str:
    """
    Canonical formula of the atom multiset; empty input gives "".
    Ex: [C, H, H, H, H] -> 'CH4', [Na, Cl] -> 'NaCl'
    """
    return formula_from_counts(count_symbols(atoms))


# ============================================================
#   Formula string -> counts
# ============================================================

ELEMENT_REGEX = r"([A-Z][a-z]?)(\d*)"
PAREN_REGEX = r"\(([^()]+)\)(\d*)"


def _parse_simple(formula: str) -> Dict[str, int]:
    """
    Parse simple formulas without parentheses.
    Ex: 'H2O' -> {'H': 2, 'O': 1}
    """
    result: Dict[str, int] = {}
    consumed = 0
    for match in re.finditer(ELEMENT_REGEX, formula):
        if match.start() != consumed:
            break
        symbol, count = match.groups()
        result[symbol] = result.get(symbol, 0) + (int(count) if count else 1)
        consumed = match.end()
    if consumed != len(formula):
        raise ValueError(f"Unexpected characters in formula at {formula[consumed:]!r}")
    return result


def parse_formula(formula: str) -> Dict[str, int]:
    """
    Parse a chemical formula into an element -> count dictionary.

    Supports nested parentheses with multipliers, e.g. 'Mg(OH)2' or
    '(NH4)2SO4'. Every symbol must exist in the element catalog.

    Raises:
        ValueError: on empty input, stray characters or unknown symbols.
    """
    working = formula.replace(" ", "")
    if not working:
        raise ValueError("Cannot parse empty formula string.")

    # resolve innermost parentheses until none remain
    while True:
        match = re.search(PAREN_REGEX, working)
        if not match:
            break
        group, multiplier = match.groups()
        multiplier = int(multiplier) if multiplier else 1
        expanded = "".join(f"{sym}{cnt * multiplier}" for sym, cnt in _parse_simple(group).items())
        start, end = match.span()
        working = working[:start] + expanded + working[end:]

    counts = _parse_simple(working)

    unknown = [sym for sym in counts if get_element(sym) is None]
    if unknown:
        raise ValueError(f"Unknown element symbol(s) in {formula!r}: {', '.join(unknown)}")
    return counts
