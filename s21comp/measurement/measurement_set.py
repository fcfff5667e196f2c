"""
Measurement set: a batch of parsed sweeps.

Files are parsed independently; a file that fails is recorded as such and
the batch carries on. The shared frequency axis comes from the first file,
in submission order, that parsed successfully.
"""

from __future__ import annotations

import csv
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from .csv_source import label_from_filename, read_rows
from .extractor import ExtractorConfig, ParseError, extract_sweep
from .sweep import Sweep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadOutcome:
    """Result of loading one file: a sweep or a failure message."""
    label: str
    sweep: Optional[Sweep] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.sweep is not None

    @property
    def status(self) -> str:
        """Short human-readable status."""
        if self.sweep is not None:
            return f"{len(self.sweep)} data points"
        return "Load Failed"


@dataclass(frozen=True, eq=False)
class MeasurementSet:
    """
    Immutable collection of sweeps from one load batch.

    `outcomes` keeps every submitted file in submission order, failures
    included. `sweeps` maps label to Sweep for the successful ones.
    """
    outcomes: tuple[LoadOutcome, ...] = ()
    sweeps: Mapping[str, Sweep] = field(default_factory=lambda: MappingProxyType({}))
    frequency_axis: np.ndarray = field(default_factory=lambda: np.array([]))

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[LoadOutcome]) -> "MeasurementSet":
        """Aggregate outcomes (already in submission order) into a set."""
        outcomes = tuple(outcomes)
        sweeps: dict[str, Sweep] = {}
        anchor: Optional[Sweep] = None
        for outcome in outcomes:
            if outcome.sweep is None:
                continue
            sweeps[outcome.label] = outcome.sweep
            if anchor is None:
                anchor = outcome.sweep
        axis = anchor.frequencies_hz if anchor is not None else np.array([])
        return cls(outcomes=outcomes, sweeps=MappingProxyType(sweeps), frequency_axis=axis)

    @property
    def ok(self) -> bool:
        """True when at least one sweep loaded."""
        return bool(self.sweeps)

    @property
    def labels(self) -> list[str]:
        """Labels of loaded sweeps, in load order."""
        return list(self.sweeps)

    @property
    def failures(self) -> dict[str, str]:
        """Label -> error message for failed files whose label has no sweep."""
        return {o.label: o.error for o in self.outcomes
                if o.sweep is None and o.label not in self.sweeps}

    def __contains__(self, label) -> bool:
        return label in self.sweeps

    def __getitem__(self, label: str) -> Sweep:
        return self.sweeps[label]

    def __len__(self) -> int:
        return len(self.sweeps)

    def __iter__(self):
        return iter(self.sweeps)


def _load_one(label: str, content: bytes | str, config: ExtractorConfig) -> LoadOutcome:
    try:
        rows = read_rows(content)
        sweep = extract_sweep(label, rows, config)
    except (ParseError, csv.Error) as e:
        logger.warning("Error in %s: %s", label, e)
        return LoadOutcome(label=label, error=str(e))
    return LoadOutcome(label=label, sweep=sweep)


def load(files: Sequence[tuple[str, bytes | str]],
         config: ExtractorConfig | None = None,
         max_workers: int | None = None) -> MeasurementSet:
    """
    Parse a batch of files into a MeasurementSet.

    Args:
        files: (label, raw content) pairs in submission order
        config: Extraction window for files without BEGIN/END markers
        max_workers: Parse files on a thread pool when > 1

    Returns:
        MeasurementSet; check `.ok` for batch success
    """
    config = config or ExtractorConfig()
    files = list(files)

    if max_workers and max_workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            # map() yields in submission order regardless of completion order
            outcomes = list(pool.map(lambda f: _load_one(f[0], f[1], config), files))
    else:
        outcomes = [_load_one(label, content, config) for label, content in files]

    measurements = MeasurementSet.from_outcomes(outcomes)
    logger.info("%d of %d files loaded successfully",
                sum(o.ok for o in outcomes), len(files))
    return measurements


def load_paths(paths: Sequence[str | Path],
               config: ExtractorConfig | None = None,
               max_workers: int | None = None) -> MeasurementSet:
    """
    Load CSV files from disk, labelling each by its file name.

    Unreadable files become failed outcomes like unparsable ones.
    """
    paths = list(paths)
    files = []
    unreadable = {}
    for i, path in enumerate(paths):
        label = label_from_filename(path)
        try:
            files.append((label, Path(path).read_bytes()))
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            unreadable[i] = LoadOutcome(label=label, error=f"cannot read file: {e.strerror or e}")

    if not unreadable:
        return load(files, config, max_workers)

    parsed = iter(load(files, config, max_workers).outcomes)
    outcomes = [unreadable[i] if i in unreadable else next(parsed) for i in range(len(paths))]
    return MeasurementSet.from_outcomes(outcomes)
