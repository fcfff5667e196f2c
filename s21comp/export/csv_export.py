"""
CSV export of compensated S21 curves.

One row per point of the set's frequency axis; one column per
non-reference sweep. Values are written with 6 decimals. A curve shorter
than the axis leaves its remaining cells empty.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from ..analysis.compensation import CompensationResult
from ..measurement.measurement_set import MeasurementSet
from ..utils.constants import EXPORT_COLUMN_SUFFIX, EXPORT_DECIMALS, EXPORT_FREQ_HEADER
from ..utils.units import format_fixed, format_number

logger = logging.getLogger(__name__)


def export_header(result: CompensationResult) -> list[str]:
    """Column names of the export file."""
    return [EXPORT_FREQ_HEADER] + [f"{name}{EXPORT_COLUMN_SUFFIX}" for name in result.plotted()]


def export_rows(measurements: MeasurementSet, result: CompensationResult) -> list[list[str]]:
    """Formatted data rows, one per frequency-axis index."""
    curves = list(result.plotted().values())
    rows = []
    for i, freq in enumerate(measurements.frequency_axis):
        row = [format_number(freq)]
        for curve in curves:
            row.append(format_fixed(curve[i], EXPORT_DECIMALS) if i < len(curve) else "")
        rows.append(row)
    return rows


def export_compensated_csv(measurements: MeasurementSet, result: CompensationResult) -> str:
    """Render the compensated curves as CSV text."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(export_header(result))
    writer.writerows(export_rows(measurements, result))
    return buf.getvalue()


def write_compensated_csv(filepath: str | Path, measurements: MeasurementSet,
                          result: CompensationResult) -> Path:
    """Write the compensated curves to a CSV file and return its path."""
    filepath = Path(filepath)
    filepath.write_text(export_compensated_csv(measurements, result), encoding="utf-8")
    logger.info("Wrote %d rows to %s", len(measurements.frequency_axis), filepath)
    return filepath
