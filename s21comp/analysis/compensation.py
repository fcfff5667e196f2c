"""
Reflection-loss compensation of S21 against a reference sweep.

Raw S21 includes the power lost to reflection at the input. Removing that
loss, and subtracting from a reference measurement, gives the transmission
difference between each device and the reference:

    loss(S11)     = 10*log10(1 - 10^(S11/10))
    ref[i]        = S21_ref[i] - loss(S11_ref[i])
    comp[L][i]    = ref[i] - S21_L[i] + loss(S11_L[i])

Sweeps are aligned by index, not by frequency value. A sweep shorter than
the reference (or longer) yields a curve of the shorter length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ..measurement.measurement_set import MeasurementSet
from ..utils.units import reflection_loss_db

logger = logging.getLogger(__name__)


class ReferenceNotFoundError(KeyError):
    """The requested reference label is not part of the measurement set."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(label)

    def __str__(self) -> str:
        return f"Reference file '{self.label}' not found."


@dataclass(frozen=True, eq=False)
class CompensationResult:
    """Compensated S21 (dB) per label, the reference included."""
    reference: str
    curves: dict[str, np.ndarray] = field(default_factory=dict)

    def __getitem__(self, label: str) -> np.ndarray:
        return self.curves[label]

    def __contains__(self, label) -> bool:
        return label in self.curves

    def __len__(self) -> int:
        return len(self.curves)

    @property
    def labels(self) -> list[str]:
        return list(self.curves)

    def plotted(self) -> dict[str, np.ndarray]:
        """Curves of every label except the reference."""
        return {k: v for k, v in self.curves.items() if k != self.reference}


def loss_db(s11_db):
    """
    Reflection loss in dB for S11 in dB.

    Vectorised. S11 = 0 dB gives -inf and S11 > 0 dB gives NaN; both are
    returned as values, never raised.
    """
    return reflection_loss_db(s11_db)


def reference_curve(s21_db: np.ndarray, s11_db: np.ndarray) -> np.ndarray:
    """Reference baseline: S21 with its own reflection loss removed."""
    return np.asarray(s21_db, dtype=float) - loss_db(s11_db)


def compensate_curve(ref_values: np.ndarray, s21_db: np.ndarray,
                     s11_db: np.ndarray) -> np.ndarray:
    """Compensate one sweep against reference values, index by index."""
    n = min(len(ref_values), len(s21_db))
    with np.errstate(invalid="ignore"):
        return ref_values[:n] - np.asarray(s21_db[:n], dtype=float) + loss_db(s11_db[:n])


def compensate(measurements: MeasurementSet, reference_label: str) -> CompensationResult:
    """
    Compensate every sweep of a set against one reference sweep.

    Args:
        measurements: Loaded sweeps
        reference_label: Label of the reference sweep (surrounding
            whitespace is ignored)

    Returns:
        CompensationResult with one curve per label, in load order

    Raises:
        ReferenceNotFoundError: label is blank or not in the set
    """
    label = (reference_label or "").strip()
    if not label or label not in measurements:
        raise ReferenceNotFoundError(label)

    ref = measurements[label]
    with np.errstate(invalid="ignore"):
        ref_values = reference_curve(ref.s21_db, ref.s11_db)

    curves = {}
    for name, sweep in measurements.sweeps.items():
        curves[name] = compensate_curve(ref_values, sweep.s21_db, sweep.s11_db)
        if len(sweep) != len(ref):
            logger.debug("Sweep %s has %d points, reference has %d; aligned by index",
                         name, len(sweep), len(ref))

    logger.info("Compensated %d sweeps against reference %s", len(curves), label)
    return CompensationResult(reference=label, curves=curves)
