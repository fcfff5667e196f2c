"""Export of compensated curves."""

from .csv_export import export_compensated_csv, write_compensated_csv
