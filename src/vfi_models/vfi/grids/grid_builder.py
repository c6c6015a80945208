# vfi_models/vfi/grids/grid_builder.py
"""
Grid construction utilities for VFI state spaces.

This module builds the productivity grid and its transition matrix
(Tauchen's method), the capital grid bracketing the steady states of
the extreme productivity levels, and the initial value function.
"""

import logging
from typing import Any, Dict, Tuple

import tensorflow as tf

from vfi_models.config.model_params import ModelParams
from vfi_models.core.timing import Timer
from vfi_models.core.types import TENSORFLOW_DTYPE, Tensor
from vfi_models.econ import SteadyStateCalculator
from vfi_models.vfi.grids.tauchen import tauchen_discretization
from vfi_models.vfi.value_init import initialize_value_function

logger = logging.getLogger(__name__)

# Capital grid spans [0.95 * k_ss(z_min), 1.05 * k_ss(z_max)]
CAPITAL_LOWER_SCALE = 0.95
CAPITAL_UPPER_SCALE = 1.05


class GridBuilder:
    """
    Utility class for constructing VFI state space grids.

    This class provides static methods for building discretized grids
    for capital and productivity state variables.
    """

    @staticmethod
    def build_productivity_grid(
        params: ModelParams
    ) -> Tuple[Tensor, Tensor, float, float]:
        """
        Build productivity grid using Tauchen's method.

        Args:
            params: Model parameters with AR(1) process parameters.

        Returns:
            Tuple containing:
                - z_grid: Productivity grid tensor.
                - P: Transition probability matrix.
                - z_min: Minimum productivity value.
                - z_max: Maximum productivity value.
        """
        z_grid, P = tauchen_discretization(params)
        z_min = float(tf.reduce_min(z_grid))
        z_max = float(tf.reduce_max(z_grid))

        logger.info(
            f"  Productivity grid: nz={params.nz}, "
            f"z in [{z_min:.4f}, {z_max:.4f}]"
        )
        return z_grid, P, z_min, z_max

    @staticmethod
    def build_capital_grid(
        params: ModelParams,
        z_grid: Tensor,
    ) -> Tensor:
        """
        Build an evenly spaced capital grid around the steady states.

        The lower bound sits just below the steady state of the lowest
        productivity level and the upper bound just above that of the
        highest level.

        Args:
            params: Model parameters.
            z_grid: Productivity grid in levels, sorted ascending.

        Returns:
            Capital grid tensor of shape ``(nk,)``.

        Raises:
            ValueError: If ``nk < 2`` or the discount factor or capital
                share lies outside (0, 1).
        """
        if params.nk < 2:
            raise ValueError(f"nk must be at least 2, got {params.nk}")
        if not 0.0 < params.beta < 1.0:
            raise ValueError(
                f"Discount factor must be in (0, 1), got {params.beta}"
            )
        if not 0.0 < params.alpha < 1.0:
            raise ValueError(
                f"Capital share must be in (0, 1), got {params.alpha}"
            )

        k_lo = SteadyStateCalculator.calculate_capital(params, z_grid[0])
        k_hi = SteadyStateCalculator.calculate_capital(params, z_grid[-1])
        k_min = CAPITAL_LOWER_SCALE * float(k_lo)
        k_max = CAPITAL_UPPER_SCALE * float(k_hi)

        logger.info(
            f"  Capital grid: nk={params.nk}, k in [{k_min:.4f}, {k_max:.4f}]"
        )
        return GridBuilder._build_linear_grid(k_min, k_max, params.nk)

    @staticmethod
    def build_state_space(params: ModelParams) -> Dict[str, Any]:
        """
        Build every grid VFI needs, timing each stage.

        Args:
            params: Model parameters.

        Returns:
            Dictionary with ``Z``, ``transition_matrix``, ``K``, ``V0``
            (shape ``(nk, nz)``) and ``timings`` (seconds per stage).
        """
        timings = {}

        with Timer("ar1") as t:
            z_grid, P, _, _ = GridBuilder.build_productivity_grid(params)
        timings["ar1"] = t.elapsed

        with Timer("k_grid") as t:
            k_grid = GridBuilder.build_capital_grid(params, z_grid)
        timings["k_grid"] = t.elapsed

        with Timer("vf_init") as t:
            v0 = initialize_value_function(params, k_grid, z_grid)
        timings["vf_init"] = t.elapsed

        return {
            "Z": z_grid,
            "transition_matrix": P,
            "K": k_grid,
            "V0": v0,
            "timings": timings,
        }

    @staticmethod
    def _build_linear_grid(
        min_val: float,
        max_val: float,
        n_points: int
    ) -> Tensor:
        """Build a linearly-spaced grid."""
        return tf.linspace(
            tf.constant(min_val, dtype=TENSORFLOW_DTYPE),
            tf.constant(max_val, dtype=TENSORFLOW_DTYPE),
            n_points
        )
