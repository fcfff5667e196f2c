"""
Tabular row source for instrument CSV exports.

Turns raw file content into rows of string cells. The delimiter is sniffed
when not given, since analyzers export comma, semicolon or tab separated
files depending on locale.
"""

from __future__ import annotations

import csv
import io
import logging
import os
import re
from pathlib import Path

from ..utils.constants import BEGIN_MARKER, END_MARKER, SNIFF_DELIMITERS

logger = logging.getLogger(__name__)

_SNIFF_SAMPLE_BYTES = 8192
_COMMENT_PREFIXES = ("!", "#")
_FIELD_SPLIT_RE = re.compile("[" + re.escape(SNIFF_DELIMITERS) + "]")
_NUMBER_START_RE = re.compile(r"\s*[-+]?\.?\d")


def decode_content(content: bytes | str) -> str:
    """Decode raw file bytes as UTF-8, dropping a byte-order mark."""
    if isinstance(content, str):
        return content.lstrip("\ufeff")
    return content.decode("utf-8-sig", errors="replace")


def _content_lines(sample: str) -> list[str]:
    """Lines of the sample without blanks, comments or BEGIN/END markers."""
    lines = []
    for line in sample.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue
        first = _FIELD_SPLIT_RE.split(stripped, 1)[0].strip().upper()
        if first in (BEGIN_MARKER, END_MARKER):
            continue
        lines.append(line)
    return lines


def _cells(line: str, delimiter: str) -> list[str]:
    return next(csv.reader([line], delimiter=delimiter), [])


def _header_delimiter(lines: list[str]) -> str | None:
    """
    Delimiter that splits a header line and the data row below it into the
    most cells, at least three. Earlier candidates win ties.
    """
    best, best_cells = None, 2
    for header, first_row in zip(lines, lines[1:]):
        lowered = header.lower()
        if "freq" not in lowered and "hz" not in lowered:
            continue
        for delimiter in SNIFF_DELIMITERS:
            row = _cells(first_row, delimiter)
            if not row or not _NUMBER_START_RE.match(row[0]):
                continue
            cells = min(len(_cells(header, delimiter)), len(row))
            if cells > best_cells:
                best, best_cells = delimiter, cells
    return best


def sniff_delimiter(text: str) -> str:
    """
    Guess the field delimiter from the start of the text.

    Comment lines and BEGIN/END markers are ignored, since free-text
    metadata may use a different separator than the data. The header row
    decides when one is found; otherwise csv.Sniffer, then the most
    frequent candidate, then ','.
    """
    lines = _content_lines(text[:_SNIFF_SAMPLE_BYTES])
    delimiter = _header_delimiter(lines)
    if delimiter is not None:
        return delimiter

    sample = "\n".join(lines)
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=SNIFF_DELIMITERS)
    except csv.Error:
        counts = {d: sample.count(d) for d in SNIFF_DELIMITERS}
        best = max(counts, key=counts.get)
        return best if counts[best] > 0 else ","
    return dialect.delimiter


def read_rows(content: bytes | str, delimiter: str | None = None) -> list[list[str]]:
    """
    Split CSV content into rows of string cells.

    Blank lines are skipped. Rows keep their original cell count, so
    ragged metadata lines above the data block are preserved.

    Args:
        content: Raw bytes or already decoded text
        delimiter: Field delimiter; sniffed when None

    Returns:
        List of rows, each a list of cell strings
    """
    text = decode_content(content)
    if delimiter is None:
        delimiter = sniff_delimiter(text)

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    rows = [row for row in reader if row and row != [""]]
    logger.debug("Read %d rows (delimiter=%r)", len(rows), delimiter)
    return rows


def read_rows_from_path(filepath: str | Path, delimiter: str | None = None) -> list[list[str]]:
    """Read a CSV file from disk into rows."""
    return read_rows(Path(filepath).read_bytes(), delimiter=delimiter)


def label_from_filename(name: str | Path) -> str:
    """Sweep label for a file: its base name with the first '.csv' removed."""
    return os.path.basename(str(name)).replace(".csv", "", 1)
