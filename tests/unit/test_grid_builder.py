"""Unit tests for grid_builder: GridBuilder and SteadyStateCalculator."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from vfi_models.config.model_params import ModelParams
from vfi_models.econ import SteadyStateCalculator
from vfi_models.vfi.grids.grid_builder import GridBuilder


def _make_params(**overrides):
    defaults = dict(
        nk=20, nz=5, eta=2.0, beta=0.96, alpha=0.3, delta=0.1,
        mu=0.0, rho=0.9, sigma=0.05, lambda_=3.0,
    )
    defaults.update(overrides)
    return ModelParams(**defaults)


class TestGridBuilderProductivity:
    """Tests for productivity grid construction."""

    def test_shape(self):
        """Grid and transition matrix have correct shapes."""
        z_grid, P, z_min, z_max = GridBuilder.build_productivity_grid(_make_params())
        assert z_grid.shape == (5,)
        assert P.shape == (5, 5)

    def test_transition_rows_sum_to_one(self):
        """Each row of the transition matrix sums to 1."""
        _, P, _, _ = GridBuilder.build_productivity_grid(_make_params(nz=7))
        row_sums = tf.reduce_sum(P, axis=1).numpy()
        np.testing.assert_allclose(row_sums, 1.0, atol=1e-9)

    def test_grid_sorted(self):
        """Productivity grid is sorted ascending."""
        z_grid, _, _, _ = GridBuilder.build_productivity_grid(_make_params(nz=11))
        assert np.all(np.diff(z_grid.numpy()) > 0)

    def test_min_max_consistent(self):
        """z_min < z_max and match grid endpoints."""
        z_grid, _, z_min, z_max = GridBuilder.build_productivity_grid(_make_params(nz=9))
        z = z_grid.numpy()
        assert z_min == pytest.approx(z[0], abs=1e-12)
        assert z_max == pytest.approx(z[-1], abs=1e-12)
        assert z_min < z_max

    def test_invalid_ar1_rejected(self):
        with pytest.raises(ValueError, match="sigma"):
            GridBuilder.build_productivity_grid(_make_params(sigma=0.0))


class TestSteadyState:
    """Tests for deterministic steady-state formulas."""

    def test_capital_at_unit_productivity(self):
        params = _make_params()
        user_cost = 1.0 / 0.96 - 0.9
        expected = (0.3 / user_cost) ** (1.0 / 0.7)
        k_ss = SteadyStateCalculator.calculate_capital(params, 1.0)
        assert float(k_ss) == pytest.approx(expected, rel=1e-12)

    def test_capital_increasing_in_productivity(self):
        z = tf.constant([0.9, 1.0, 1.1], dtype=tf.float64)
        k_ss = SteadyStateCalculator.calculate_capital(_make_params(), z).numpy()
        assert np.all(np.diff(k_ss) > 0)

    def test_euler_equation_holds(self):
        """alpha * z * k^(alpha-1) = 1/beta - (1 - delta) at k_ss."""
        params = _make_params()
        z = 1.2
        k_ss = float(SteadyStateCalculator.calculate_capital(params, z))
        mpk = params.alpha * z * k_ss ** (params.alpha - 1.0)
        assert mpk == pytest.approx(1.0 / params.beta - (1.0 - params.delta), rel=1e-10)

    def test_consumption_positive(self):
        c_ss = SteadyStateCalculator.calculate_consumption(_make_params(), 1.0)
        assert float(c_ss) > 0


class TestGridBuilderCapital:
    """Tests for capital grid construction."""

    def test_shape(self):
        """Capital grid has correct number of points."""
        params = _make_params(nk=20)
        z_grid, _, _, _ = GridBuilder.build_productivity_grid(params)
        k_grid = GridBuilder.build_capital_grid(params, z_grid)
        assert k_grid.shape == (20,)
        assert k_grid.dtype == tf.float64

    def test_bounds(self):
        """Grid brackets the extreme steady states by 5%."""
        params = _make_params(nk=50)
        z_grid, _, _, _ = GridBuilder.build_productivity_grid(params)
        k_grid = GridBuilder.build_capital_grid(params, z_grid).numpy()
        k_lo = float(SteadyStateCalculator.calculate_capital(params, z_grid[0]))
        k_hi = float(SteadyStateCalculator.calculate_capital(params, z_grid[-1]))
        assert k_grid[0] == pytest.approx(0.95 * k_lo, rel=1e-12)
        assert k_grid[-1] == pytest.approx(1.05 * k_hi, rel=1e-12)

    def test_evenly_spaced_and_sorted(self):
        params = _make_params(nk=30)
        z_grid, _, _, _ = GridBuilder.build_productivity_grid(params)
        k = GridBuilder.build_capital_grid(params, z_grid).numpy()
        steps = np.diff(k)
        assert np.all(steps > 0)
        np.testing.assert_allclose(steps, steps[0], rtol=1e-9)

    @pytest.mark.parametrize(
        "overrides, match",
        [
            (dict(nk=1), "nk"),
            (dict(beta=1.0), "Discount factor"),
            (dict(alpha=1.0), "Capital share"),
        ],
    )
    def test_invalid_params(self, overrides, match):
        params = _make_params(**overrides)
        z_grid = tf.constant([0.9, 1.0, 1.1], dtype=tf.float64)
        with pytest.raises(ValueError, match=match):
            GridBuilder.build_capital_grid(params, z_grid)
