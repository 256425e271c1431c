# config/constants.py
"""
DataLens - engine constants.

These values are part of the output contract (chart series sizes, report
keys) and therefore are not exposed as environment settings.
"""

from __future__ import annotations

from typing import Final, Tuple

# ═══════════════════════════════════════════════════════════════════════════
# Aggregation caps
# ═══════════════════════════════════════════════════════════════════════════

PIE_MAX_SLICES: Final[int] = 10
CATEGORY_MAX_GROUPS: Final[int] = 15
PERCENTAGE_DECIMALS: Final[int] = 1

# ═══════════════════════════════════════════════════════════════════════════
# Ingestion
# ═══════════════════════════════════════════════════════════════════════════

MIN_GRID_ROWS: Final[int] = 2  # header + one data row
DEFAULT_DELIMITER: Final[str] = ","

# Tokenizer warning codes
TOO_MANY_FIELDS: Final[str] = "TooManyFields"
TOO_FEW_FIELDS: Final[str] = "TooFewFields"

# ═══════════════════════════════════════════════════════════════════════════
# Report export
# ═══════════════════════════════════════════════════════════════════════════

REPORT_KEYS: Final[Tuple[str, ...]] = (
    "fileName",
    "timestamp",
    "summary",
    "numericStatistics",
    "categoricalStatistics",
)
REPORT_FILE_PREFIX: Final[str] = "analysis_"
