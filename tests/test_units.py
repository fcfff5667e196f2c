import math

import numpy as np
import pytest

from s21comp.utils.units import (
    db_to_linear, format_ghz, hz_to_ghz, linear_to_db, reflection_loss_db,
)


def test_db_linear_round_trip():
    assert db_to_linear(-10.0) == pytest.approx(0.1)
    assert linear_to_db(0.01) == pytest.approx(-20.0)


def test_linear_to_db_edges():
    assert np.isneginf(linear_to_db(0.0))
    assert np.isnan(linear_to_db(-1.0))


def test_reflection_loss():
    assert reflection_loss_db(-3.0) == pytest.approx(10 * math.log10(1 - 10 ** -0.3))
    np.testing.assert_allclose(reflection_loss_db([-40.0]), [10 * math.log10(1 - 1e-4)])


def test_ghz():
    np.testing.assert_allclose(hz_to_ghz([1e9, 2.5e9]), [1.0, 2.5])
    assert format_ghz(2.4e9) == "2.400"
    assert format_ghz(915e6, 1) == "0.9"
