"""Measurement ingestion: CSV rows, sweep extraction, measurement sets."""

from .sweep import Sweep, SweepPoint
from .extractor import ExtractorConfig, ParseError, extract, extract_sweep
from .measurement_set import LoadOutcome, MeasurementSet, load, load_paths
