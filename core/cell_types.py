# core/cell_types.py
"""
DataLens - cell type inference.

Every trimmed text cell becomes exactly one of two tagged values:

- ``NumberCell``  a finite float parsed from a well-formed decimal or
  scientific literal covering the whole cell
- ``TextCell``    anything else, including the empty string ("present but
  blank")

Parsing is strict: ``"12abc"``, ``"NaN"``, ``"Infinity"``, ``"0x1F"``,
``"1_000"`` and ``"1,5"`` stay text, and literals overflowing to infinity
(``"1e999"``) stay text as well.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Union

__all__ = [
    "NumberCell",
    "TextCell",
    "Cell",
    "parse_number",
    "infer_cell",
    "is_number",
    "is_blank",
    "format_number",
    "display_value",
]

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# display switches to exponent notation from here on
_PLAIN_INTEGER_LIMIT = 1e21


@dataclass(frozen=True)
class NumberCell:
    """A finite numeric cell."""
    value: float


@dataclass(frozen=True)
class TextCell:
    """A text cell; ``text == ""`` marks a blank (missing) value."""
    text: str

    @property
    def is_blank(self) -> bool:
        return self.text == ""


Cell = Union[NumberCell, TextCell]


def parse_number(raw: str) -> Optional[float]:
    """Return the finite float spelled by ``raw`` or ``None``."""
    if not _NUMBER_RE.fullmatch(raw):
        return None
    value = float(raw)
    if not math.isfinite(value):
        return None
    return value


def infer_cell(raw: str) -> Cell:
    """Classify one trimmed cell."""
    number = parse_number(raw)
    if number is None:
        return TextCell(raw)
    return NumberCell(number)


def is_number(cell: Optional[Cell]) -> bool:
    return isinstance(cell, NumberCell)


def is_blank(cell: Optional[Cell]) -> bool:
    return isinstance(cell, TextCell) and cell.is_blank


def format_number(value: float) -> str:
    """Integral values without a fractional part, others as shortest repr."""
    if value.is_integer() and abs(value) < _PLAIN_INTEGER_LIMIT:
        return str(int(value))
    return repr(value)


def display_value(cell: Optional[Cell]) -> str:
    """
    Human/display form of a cell, used as group key and in labels.

    A missing cell (column absent from the record) renders as ``""``.
    """
    if isinstance(cell, NumberCell):
        return format_number(cell.value)
    if isinstance(cell, TextCell):
        return cell.text
    return ""
