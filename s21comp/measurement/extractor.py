"""
Sweep extraction from instrument CSV rows.

Network analyzers wrap their data in very different amounts of metadata.
Two layouts are recognised:

  1. A BEGIN ... END block. The header is the first row inside the block
     whose first cell mentions the frequency; data follows it.
  2. No markers. A fixed number of rows is skipped and a bounded number
     of rows is read; the row just above the data is the header.

Columns are matched by name fragments, so their order does not matter.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Sequence

from ..utils.constants import (
    BEGIN_MARKER, END_MARKER, DEFAULT_MAX_ROWS, DEFAULT_SKIP_ROWS,
    FREQ_CANDIDATES, S11_CANDIDATES, S21_CANDIDATES,
)
from .sweep import Sweep, SweepPoint

logger = logging.getLogger(__name__)

# Leading numeric prefix, as a browser's parseFloat reads it
_FLOAT_PREFIX_RE = re.compile(
    r'^\s*([+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?))'
)


class ParseError(ValueError):
    """A file could not be turned into a sweep."""


@dataclass
class ExtractorConfig:
    """Window used when a file has no BEGIN/END block."""
    skip_rows: int = DEFAULT_SKIP_ROWS
    max_rows: int = DEFAULT_MAX_ROWS

    def __post_init__(self):
        if self.skip_rows < 0:
            raise ValueError(f"skip_rows must be >= 0, got {self.skip_rows}")
        if self.max_rows < 1:
            raise ValueError(f"max_rows must be >= 1, got {self.max_rows}")


@dataclass
class DataWindow:
    """Location of the header and data rows inside a file."""
    start: int
    end: int
    begin_index: int = -1
    end_index: int = -1
    header_index: int = -1

    @property
    def has_block(self) -> bool:
        return self.begin_index >= 0


@dataclass
class ColumnMap:
    """Physical column indices of the logical sweep columns."""
    frequency: int = -1
    s11: int = -1
    s21: int = -1
    missing: list[str] = field(default_factory=list)


def parse_float(cell) -> float:
    """
    Parse the leading number of a cell.

    Trailing text is ignored ("1.5e9 Hz" -> 1.5e9); a cell without a
    leading number yields NaN.
    """
    if cell is None:
        return math.nan
    match = _FLOAT_PREFIX_RE.match(str(cell))
    if match is None:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def _first_cell(row: Sequence[str]) -> str:
    return str(row[0]).strip() if row else ""


def locate_window(rows: Sequence[Sequence[str]],
                  config: ExtractorConfig | None = None) -> DataWindow:
    """
    Find where the data rows of a file are.

    BEGIN/END markers take precedence; skip_rows/max_rows are only used
    when no BEGIN row exists.
    """
    config = config or ExtractorConfig()
    begin_index = end_index = header_index = -1

    for i, row in enumerate(rows):
        cell = _first_cell(row)
        upper = cell.upper()
        if upper == BEGIN_MARKER:
            begin_index = i
        if upper == END_MARKER:
            end_index = i
            break
        if begin_index >= 0 and header_index == -1 and (
                "FREQ" in upper or "HZ" in upper):
            header_index = i

    if begin_index >= 0:
        start = header_index + 1 if header_index >= 0 else begin_index + 1
        end = end_index if end_index >= 0 else start + config.max_rows
    else:
        start = config.skip_rows
        end = config.skip_rows + config.max_rows
    end = min(end, len(rows))

    return DataWindow(start=start, end=end, begin_index=begin_index,
                      end_index=end_index, header_index=header_index)


def _find_column(headers: Sequence[str], candidates: Sequence[str]) -> int:
    for i, header in enumerate(headers):
        name = str(header).strip().lower()
        if any(c in name for c in candidates):
            return i
    return -1


def map_columns(headers: Sequence[str]) -> ColumnMap:
    """Pick the first header cell, left to right, matching each logical column."""
    columns = ColumnMap(
        frequency=_find_column(headers, FREQ_CANDIDATES),
        s11=_find_column(headers, S11_CANDIDATES),
        s21=_find_column(headers, S21_CANDIDATES),
    )
    for name in ("frequency", "s11", "s21"):
        if getattr(columns, name) == -1:
            columns.missing.append(name)
    return columns


def extract(rows: Sequence[Sequence[str]],
            config: ExtractorConfig | None = None) -> list[SweepPoint]:
    """
    Extract validated frequency/S11/S21 points from CSV rows.

    Args:
        rows: Rows of string cells (see csv_source.read_rows)
        config: Fallback window when the file has no BEGIN/END block

    Returns:
        Sweep points in source order

    Raises:
        ParseError: a required column is missing, or no row survives
    """
    window = locate_window(rows, config)

    header_pos = window.start - 1
    headers = rows[header_pos] if 0 <= header_pos < len(rows) else []
    columns = map_columns(headers)
    if columns.missing:
        raise ParseError(
            f"missing required column: {', '.join(columns.missing)} "
            f"(need Freq, S11, S21)"
        )

    points = []
    dropped = 0
    for row in rows[window.start:window.end]:
        freq = parse_float(row[columns.frequency]) if columns.frequency < len(row) else math.nan
        s11 = parse_float(row[columns.s11]) if columns.s11 < len(row) else math.nan
        s21 = parse_float(row[columns.s21]) if columns.s21 < len(row) else math.nan
        if not (math.isfinite(freq) and freq > 0 and math.isfinite(s11) and math.isfinite(s21)):
            dropped += 1
            continue
        points.append(SweepPoint(frequency_hz=freq, s11_db=s11, s21_db=s21))

    logger.debug(
        "Window rows %d..%d (block=%s), columns f=%d s11=%d s21=%d, kept %d, dropped %d",
        window.start, window.end, window.has_block,
        columns.frequency, columns.s11, columns.s21, len(points), dropped,
    )

    if not points:
        raise ParseError("empty result: no valid data points found")
    return points


def extract_sweep(label: str, rows: Sequence[Sequence[str]],
                  config: ExtractorConfig | None = None) -> Sweep:
    """Extract a named Sweep from CSV rows."""
    return Sweep(label=label, points=tuple(extract(rows, config)))
