from __future__ import annotations
from pathlib import Path
import json
import logging
from typing import Dict, Any, List, Optional, Tuple, Union

from .constants import (
    ELEMENTS_JSON,
    LANTHANIDE_RANGE,
    ACTINIDE_RANGE,
    LANTHANIDE_ROW,
    ACTINIDE_ROW,
    F_BLOCK_FIRST_COLUMN,
)

logger = logging.getLogger(__name__)

# In-memory cache, symbol -> Element, in atomic-number order
ELEMENT_DATA: Dict[str, "Element"] = {}


class Element:
    """
    Reference data for one chemical element.

    Instances come from the catalog and are shared by every placed atom of
    that element, so they are read-only once built.
    """

    __slots__ = (
        "atomic_number", "symbol", "name", "category", "valence_electrons",
        "electronegativity", "group", "period", "is_metal",
    )

    def __init__(self,
                 atomic_number: int,
                 symbol: str,
                 name: str,
                 category: str,
                 valence_electrons: int,
                 electronegativity: Optional[float],
                 group: Optional[int],
                 period: int,
                 is_metal: bool):
        set_ = object.__setattr__
        set_(self, "atomic_number", int(atomic_number))
        set_(self, "symbol", symbol)
        set_(self, "name", name)
        set_(self, "category", category)
        set_(self, "valence_electrons", int(valence_electrons))
        set_(self, "electronegativity", float(electronegativity) if electronegativity is not None else None)
        set_(self, "group", int(group) if group is not None else None)
        set_(self, "period", int(period))
        set_(self, "is_metal", bool(is_metal))

    def __setattr__(self, key, value):
        raise AttributeError(f"Element {self.symbol} is read-only")

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "Element":
        return cls(
            atomic_number=row["atomic_number"],
            symbol=row["symbol"],
            name=row["name"],
            category=row["category"],
            valence_electrons=row["valence_electrons"],
            electronegativity=row.get("electronegativity"),
            group=row.get("group"),
            period=row["period"],
            is_metal=row["is_metal"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__slots__}

    def __eq__(self, other) -> bool:
        return isinstance(other, Element) and other.atomic_number == self.atomic_number

    def __hash__(self) -> int:
        return hash(self.atomic_number)

    def __repr__(self) -> str:
        return f"<Element {self.atomic_number} {self.symbol} ({self.category})>"


def load_elements(path: Union[Path, str] = None) -> Dict[str, Element]:
    """
    Load elements.json into the ELEMENT_DATA dictionary.
    If path is not provided, uses the default ELEMENTS_JSON.

    The catalog is mandatory: a missing or malformed file is logged and
    re-raised as RuntimeError.

    Returns
    -------
    Dict[str, Element]
        A mapping from element symbol (as written, e.g. "Na") to its Element.
    """
    global ELEMENT_DATA
    if path is None:
        path = ELEMENTS_JSON

    try:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)

        rows = raw["elements"] if isinstance(raw, dict) and "elements" in raw else raw
        elements = sorted((Element.from_dict(row) for row in rows), key=lambda e: e.atomic_number)
    except Exception as e:
        logger.exception(f"Failed to load element catalog from {path}: {e}")
        raise RuntimeError(f"Failed to load element catalog from {path}") from e

    ELEMENT_DATA = {el.symbol: el for el in elements}
    logger.info(f"Loaded {len(ELEMENT_DATA)} elements from {path}")
    return ELEMENT_DATA


def _catalog() -> Dict[str, Element]:
    if not ELEMENT_DATA:
        load_elements()
    return ELEMENT_DATA


def get_element(symbol: str) -> Optional[Element]:
    """
    Return the Element for a symbol, or None when the symbol is unknown.
    Matching is exact and case-sensitive ("Co" is cobalt, "CO" is nothing).
    """
    return _catalog().get(symbol)


def get_element_by_number(atomic_number: int) -> Optional[Element]:
    for el in _catalog().values():
        if el.atomic_number == atomic_number:
            return el
    return None


def all_elements() -> List[Element]:
    """All catalog elements ordered by atomic number."""
    return list(_catalog().values())


def elements_by_category(category: str) -> List[Element]:
    return [el for el in _catalog().values() if el.category == category]


def periodic_grid() -> List[Tuple[Element, int, int]]:
    """
    Map each element to (element, row, col) in the standard 18-column layout.

    Rows are periods and columns are groups, except the f-block: lanthanides
    57-71 move to row 9 and actinides 89-103 to row 10, filling columns 3-17
    in atomic-number order.
    """
    grid: List[Tuple[Element, int, int]] = []
    for el in _catalog().values():
        z = el.atomic_number
        if LANTHANIDE_RANGE[0] <= z <= LANTHANIDE_RANGE[1]:
            row, col = LANTHANIDE_ROW, z - LANTHANIDE_RANGE[0] + F_BLOCK_FIRST_COLUMN
        elif ACTINIDE_RANGE[0] <= z <= ACTINIDE_RANGE[1]:
            row, col = ACTINIDE_ROW, z - ACTINIDE_RANGE[0] + F_BLOCK_FIRST_COLUMN
        else:
            row, col = el.period, el.group or 0

        if row > 0 and col > 0:
            grid.append((el, row, col))
        else:
            logger.warning(f"Element {el.symbol} has no grid position (period={el.period}, group={el.group})")
    return grid
