from __future__ import annotations
from typing import Optional, Union, Dict, Any
import uuid
import logging

import numpy as np

from .elements_data import Element, get_element

logger = logging.getLogger(__name__)


class PlacedAtom:
    """
    Represents a single atom placed on the sandbox canvas.
    """

    def __init__(
        self,
        element: Union[Element, str],
        x: float = 0.0,
        y: float = 0.0,
        uid: Optional[str] = None,
    ):
        """
        Initialize a PlacedAtom.

        Args:
            element (Element | str): Catalog element, or its symbol (e.g. "Na").
            x (float): Horizontal position in sandbox units.
            y (float): Vertical position in sandbox units.
            uid (str, optional): Unique placement identifier. Auto-generated if None.

        Raises:
            ValueError: if a symbol is given that is not in the catalog.
        """
        if isinstance(element, str):
            resolved = get_element(element)
            if resolved is None:
                raise ValueError(f"Unknown element symbol: {element!r}")
            element = resolved
        elif not isinstance(element, Element):
            raise ValueError(f"Expected an Element or symbol, got {type(element).__name__}")

        self.element: Element = element
        self.uid: str = uid or f"{element.symbol}-{uuid.uuid4().hex[:12]}"
        self.pos: np.ndarray = np.array([x, y], dtype=float)

        logger.debug(f"Placed atom {self.uid}: {self.symbol} at {self.pos}")

    @property
    def symbol(self) -> str:
        return self.element.symbol

    @property
    def x(self) -> float:
        return float(self.pos[0])

    @property
    def y(self) -> float:
        return float(self.pos[1])

    def move_to(self, x: float, y: float) -> None:
        """
        Reposition in place. Bonds are distance-derived, so callers must
        re-run bond detection afterwards.
        """
        self.pos = np.array([x, y], dtype=float)

    def distance_to(self, other: "PlacedAtom") -> float:
        return float(np.linalg.norm(other.pos - self.pos))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.uid, "symbol": self.symbol, "x": self.x, "y": self.y}

    def __repr__(self) -> str:
        return f"<PlacedAtom {self.uid} symbol={self.symbol} pos=({self.x:g}, {self.y:g})>"
