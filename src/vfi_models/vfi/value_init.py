"""Initial guess for value function iteration.

Each productivity column is seeded with the lifetime utility of staying
forever at that productivity's deterministic steady state,
``u(c_ss(z)) / (1 - beta)``, identical across the capital grid.
"""

from __future__ import annotations

import logging

import tensorflow as tf

from vfi_models.config.model_params import ModelParams
from vfi_models.core.buffers import check_buffer, write_buffer
from vfi_models.core.types import TENSORFLOW_DTYPE, Buffer, Tensor
from vfi_models.econ import SteadyStateCalculator

logger = logging.getLogger(__name__)


def crra_utility(consumption: Tensor, eta: float) -> Tensor:
    """CRRA utility ``c^(1-eta) / (1-eta)``; log utility when ``eta == 1``."""
    c = tf.cast(consumption, TENSORFLOW_DTYPE)
    if eta == 1.0:
        return tf.math.log(c)
    return c ** (1.0 - eta) / (1.0 - eta)


def initialize_value_function(
    params: ModelParams,
    k_grid: Tensor,
    z_grid: Tensor,
) -> Tensor:
    """Build the initial value function on the ``(k, z)`` grid.

    Parameters
    ----------
    params : ModelParams
        Model parameters (``beta``, ``alpha``, ``delta``, ``eta``).
    k_grid : Tensor
        Capital grid, shape ``(nk,)``.
    z_grid : Tensor
        Productivity grid in levels, shape ``(nz,)``.

    Returns
    -------
    Tensor
        Value function guess, shape ``(nk, nz)``.

    Raises
    ------
    ValueError
        If *beta* is not in (0, 1) or a steady-state consumption level is
        non-positive.
    """
    if not 0.0 < params.beta < 1.0:
        raise ValueError(
            f"Discount factor must be in (0, 1), got {params.beta}."
        )

    c_ss = SteadyStateCalculator.calculate_consumption(params, z_grid)
    if not bool(tf.reduce_all(c_ss > 0.0)):
        raise ValueError(
            "Steady-state consumption must be positive at every productivity "
            f"level, got min {float(tf.reduce_min(c_ss)):.4g}."
        )

    v_z = crra_utility(c_ss, params.eta) / (1.0 - params.beta)
    nk = tf.shape(k_grid)[0]
    return tf.tile(v_z[None, :], tf.stack([nk, 1]))


def vf_init(
    params: ModelParams,
    k_grid: Tensor,
    z_grid: Tensor,
    v_out: Buffer,
) -> None:
    """Write the initial value function into a caller-owned flat buffer.

    The layout is ``v_out[i + nk * j] = V(k_i, z_j)``, matching the flat
    transition-matrix layout used by ``ar1``.
    """
    nk = int(k_grid.shape[0])
    nz = int(z_grid.shape[0])
    check_buffer(v_out, "V", nk * nz)

    v0 = initialize_value_function(params, k_grid, z_grid)
    write_buffer(v_out, tf.reshape(tf.transpose(v0), [-1]))
    logger.debug(f"Value function initialised on a {nk}x{nz} grid.")
