"""
Unit conversion utilities for S-parameter sweeps.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

import numpy as np


# ─── Power conversions ──────────────────────────────────────────────────────

def db_to_linear(db):
    """Convert dB (power) to linear ratio. Accepts scalars or arrays."""
    return 10.0 ** (np.asarray(db, dtype=float) / 10.0)


def linear_to_db(ratio):
    """
    Convert linear power ratio to dB.

    Zero maps to -inf and negative ratios to NaN; no warnings are raised.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return 10.0 * np.log10(np.asarray(ratio, dtype=float))


def reflection_loss_db(s11_db):
    """
    Power lost to reflection, in dB: 10*log10(1 - 10^(S11/10)).

    S11 = 0 dB gives -inf (all power reflected); S11 > 0 dB gives NaN.
    """
    return linear_to_db(1.0 - db_to_linear(s11_db))


# ─── Frequency ──────────────────────────────────────────────────────────────

def hz_to_ghz(freq_hz):
    """Convert Hz to GHz."""
    return np.asarray(freq_hz, dtype=float) / 1e9


def format_ghz(freq_hz: float, decimals: int = 3) -> str:
    """Frequency label in GHz with a fixed number of decimals."""
    return f"{freq_hz / 1e9:.{decimals}f}"


# ─── Text rendering ─────────────────────────────────────────────────────────

def format_number(value: float) -> str:
    """
    Render a float the way a browser prints a number.

    Integral values lose the trailing '.0' and non-finite values are
    spelled NaN / Infinity / -Infinity.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def format_fixed(value: float, decimals: int = 6) -> str:
    """
    Fixed-point rendering the way a browser's Number.toFixed does it.

    The exact binary value is rounded half away from zero, so 0.0078125
    gives '0.007813'. Negative values keep their sign even when they round
    to zero; only -0.0 itself prints unsigned. Non-finite values and
    magnitudes from 1e21 up fall back to format_number.
    """
    value = float(value)
    if math.isnan(value) or math.isinf(value) or abs(value) >= 1e21:
        return format_number(value)
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(abs(value)).quantize(quantum, rounding=ROUND_HALF_UP,
                                           context=Context(prec=64))
    text = f"{rounded:f}"
    return "-" + text if value < 0 else text
