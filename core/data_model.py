# core/data_model.py
"""
DataLens - tabular data model.

``RawGrid``   trimmed text matrix (header + data rows), normalized to the
              header width, blank rows removed
``Record``    one data row with typed cells keyed by header
``ParseWarning`` non-fatal tokenizer diagnostic

Column classes (numeric / categorical / mixed) are never stored; they are
derived from Records on demand by ``numeric_columns`` and
``categorical_columns``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from config.constants import MIN_GRID_ROWS
from core.cell_types import Cell, NumberCell, TextCell, infer_cell
from core.exceptions import ErrorCode, InsufficientRowsError

__all__ = [
    "ParseWarning",
    "RawGrid",
    "Record",
    "build_records",
    "numeric_columns",
    "categorical_columns",
]


@dataclass(frozen=True)
class ParseWarning:
    """A malformed row that was still kept (padded or truncated)."""
    row: int            # 0-based row number in the tokenized file, header = 0
    code: str           # TooManyFields / TooFewFields
    message: str
    kind: ErrorCode = ErrorCode.PARSE_WARNING

    def to_dict(self) -> dict:
        return {"row": self.row, "code": self.code, "message": self.message, "kind": self.kind.value}


def _is_blank_row(row: Sequence[str]) -> bool:
    """True if every cell in the row is empty after trimming."""
    return all(cell == "" for cell in row)


@dataclass(frozen=True)
class RawGrid:
    """
    Header plus data rows of trimmed text cells.

    Use ``RawGrid.from_rows`` to build one from tokenizer output; the
    constructor assumes rows are already normalized.
    """
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Optional[str]]]) -> "RawGrid":
        """
        Trim cells, drop fully blank rows, normalize every data row to the
        header width and reject inputs without a header and a data row.

        Raises:
            InsufficientRowsError: fewer than 2 rows remain
        """
        cleaned: List[Tuple[str, ...]] = []
        for row in rows:
            cells = tuple("" if cell is None else str(cell).strip() for cell in row)
            if _is_blank_row(cells):
                continue
            cleaned.append(cells)

        if len(cleaned) < MIN_GRID_ROWS:
            raise InsufficientRowsError(
                "CSV file must contain at least a header row and one data row",
                details={"rows": len(cleaned)},
            )

        headers = cleaned[0]
        width = len(headers)
        data = tuple(
            row[:width] if len(row) >= width else row + ("",) * (width - len(row))
            for row in cleaned[1:]
        )
        return cls(headers=headers, rows=data)

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_columns(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class Record:
    """One typed data row. ``index`` is the 0-based order among kept rows."""
    index: int
    values: Mapping[str, Cell] = field(default_factory=dict)

    def get(self, column: str) -> Optional[Cell]:
        return self.values.get(column)

    def has_column(self, column: str) -> bool:
        return column in self.values


def build_records(grid: RawGrid) -> List[Record]:
    """Type every cell of the grid once. Later duplicate headers win."""
    records = []
    for index, row in enumerate(grid.rows):
        values = {header: infer_cell(raw) for header, raw in zip(grid.headers, row)}
        records.append(Record(index=index, values=MappingProxyType(values)))

    logger.bind(component="data_model").debug(
        f"Built {len(records)} records over {grid.n_columns} columns"
    )
    return records


def numeric_columns(records: Sequence[Record], headers: Sequence[str]) -> List[str]:
    """Headers for which at least one record holds a number."""
    return [
        header for header in headers
        if any(isinstance(r.get(header), NumberCell) for r in records)
    ]


def categorical_columns(records: Sequence[Record], headers: Sequence[str]) -> List[str]:
    """Headers for which at least one record holds non-empty text."""
    out = []
    for header in headers:
        for r in records:
            cell = r.get(header)
            if isinstance(cell, TextCell) and not cell.is_blank:
                out.append(header)
                break
    return out
