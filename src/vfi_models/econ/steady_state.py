# vfi_models/econ/steady_state.py
"""
Steady state calculations for the neoclassical growth model.

This module computes the deterministic steady state at a given
productivity level, used for capital grid bounds and the initial
value-function guess.
"""

import tensorflow as tf

from vfi_models.config.model_params import ModelParams
from vfi_models.core.types import TENSORFLOW_DTYPE, Numeric, Tensor


class SteadyStateCalculator:
    """Static methods for steady state calculations."""

    @staticmethod
    def calculate_capital(params: ModelParams, productivity: Numeric) -> Tensor:
        """
        Calculate steady-state capital holding productivity fixed.

        Derived from the Euler equation in steady state:
            k_ss = (alpha * z / (1 / beta - (1 - delta)))^(1 / (1 - alpha))

        Args:
            params: Model parameters containing discount factor,
                    depreciation and capital share.
            productivity: Productivity level(s) in levels (not logs).

        Returns:
            Steady-state capital, same shape as ``productivity``.
        """
        z = tf.cast(productivity, TENSORFLOW_DTYPE)
        user_cost = (1.0 / params.beta) - (1.0 - params.delta)
        return (params.alpha * z / user_cost) ** (1.0 / (1.0 - params.alpha))

    @staticmethod
    def calculate_consumption(params: ModelParams, productivity: Numeric) -> Tensor:
        """
        Calculate steady-state consumption: c_ss = z * k_ss^alpha - delta * k_ss.

        Args:
            params: Model parameters.
            productivity: Productivity level(s) in levels.

        Returns:
            Steady-state consumption, same shape as ``productivity``.
        """
        z = tf.cast(productivity, TENSORFLOW_DTYPE)
        k_ss = SteadyStateCalculator.calculate_capital(params, z)
        return z * k_ss ** params.alpha - params.delta * k_ss
