"""
Sweep data model.

A sweep is one file's ordered series of frequency/S11/S21 points. Points
are kept in source order; sweeps are aligned with each other by index.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SweepPoint:
    """One measured frequency point. All values finite, frequency > 0."""
    frequency_hz: float
    s11_db: float
    s21_db: float


@dataclass(frozen=True)
class Sweep:
    """Named, immutable sequence of sweep points."""
    label: str
    points: tuple[SweepPoint, ...]

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "points", tuple(self.points))
        if not self.points:
            raise ValueError(f"Sweep '{self.label}' has no points")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index: int) -> SweepPoint:
        return self.points[index]

    # ─── Convenience accessors ───────────────────────────────────────────

    @property
    def frequencies_hz(self) -> np.ndarray:
        """Frequency axis in Hz."""
        return np.array([p.frequency_hz for p in self.points], dtype=float)

    @property
    def s11_db(self) -> np.ndarray:
        """S11 in dB."""
        return np.array([p.s11_db for p in self.points], dtype=float)

    @property
    def s21_db(self) -> np.ndarray:
        """S21 in dB."""
        return np.array([p.s21_db for p in self.points], dtype=float)

    def summary(self) -> dict:
        """Return a compact summary dict of the sweep."""
        s21 = self.s21_db
        return {
            "label": self.label,
            "points": len(self.points),
            "start_ghz": self.points[0].frequency_hz / 1e9,
            "stop_ghz": self.points[-1].frequency_hz / 1e9,
            "min_s21_db": float(np.min(s21)),
            "max_s21_db": float(np.max(s21)),
        }
