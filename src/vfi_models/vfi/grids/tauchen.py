# vfi_models/vfi/grids/tauchen.py
"""
Tauchen (1986) discretization of a log-AR(1) productivity process.

The process ``x' = mu + rho * x + eps``, ``eps ~ N(0, sigma^2)`` is
approximated by a Markov chain on ``nz`` equally spaced points covering
``lambda_`` unconditional standard deviations either side of the
stationary mean.  Grid values are returned in levels, ``Z = exp(x)``.

Two entry points are provided:

    * ``tauchen_discretization`` – returns fresh ``(Z, P)`` tensors with
      ``P[i, j] = Pr(z' = Z[j] | z = Z[i])``.
    * ``ar1`` – writes into caller-owned buffers (``tf.Variable`` on any
      device, or a host ``numpy.ndarray``) using the flat layout
      ``P[i + nz * j]`` expected by the VFI kernels.

Every ``(i, j)`` cell is evaluated in one broadcast pass; the top
destination bin is the residual ``1 - sum`` of the other bins in its row,
so each row sums to one by construction.
"""

import logging
import math
from typing import Tuple

import numpy as np
import tensorflow as tf

from vfi_models.config.model_params import ModelParams
from vfi_models.core.buffers import check_buffer, write_buffer
from vfi_models.core.types import TENSORFLOW_DTYPE, Buffer, Tensor

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
#  Input validation
# ═══════════════════════════════════════════════════════════════════════════

def validate_ar1_params(params: ModelParams) -> None:
    """
    Check the AR(1) block of ``params`` before discretization.

    Args:
        params: Model parameters.

    Raises:
        ValueError: If ``nz`` is not an integer >= 3, if any real field is
            not finite, or if ``|rho| >= 1``, ``sigma <= 0`` or
            ``lambda_ <= 0``.
    """
    nz = params.nz
    if isinstance(nz, bool) or not isinstance(nz, (int, np.integer)):
        raise ValueError(f"nz must be an integer, got {nz!r}")
    if nz < 3:
        raise ValueError(f"nz must be at least 3, got {nz}")

    for name in ("mu", "rho", "sigma", "lambda_"):
        value = getattr(params, name)
        if not math.isfinite(float(value)):
            raise ValueError(f"{name} must be finite, got {value}")

    if not abs(params.rho) < 1.0:
        raise ValueError(
            f"|rho| must be < 1 for a stationary process, got {params.rho}"
        )
    if not params.sigma > 0.0:
        raise ValueError(f"sigma must be positive, got {params.sigma}")
    if not params.lambda_ > 0.0:
        raise ValueError(f"lambda_ must be positive, got {params.lambda_}")


def validate_buffers(nz: int, z_out: Buffer, p_out: Buffer) -> None:
    """
    Check that output buffers are 1-D with ``nz`` and ``nz * nz`` slots.

    Args:
        nz: Number of grid points.
        z_out: Buffer for the state grid.
        p_out: Buffer for the flattened transition matrix.

    Raises:
        TypeError: If a buffer is neither a ``tf.Variable`` nor an ndarray,
            or its dtype is not floating point.
        ValueError: If a buffer has the wrong shape or is read-only.
    """
    check_buffer(z_out, "Z", nz)
    check_buffer(p_out, "P", nz * nz)


# ═══════════════════════════════════════════════════════════════════════════
#  Discretization
# ═══════════════════════════════════════════════════════════════════════════

def tauchen_discretization(
    params: ModelParams,
    validate: bool = True
) -> Tuple[Tensor, Tensor]:
    """
    Discretize the log-AR(1) productivity process using Tauchen's method.

    Args:
        params: Model parameters; only ``nz``, ``mu``, ``rho``, ``sigma``
            and ``lambda_`` are read.
        validate: If False, skip parameter checks and return whatever the
            arithmetic produces (possibly NaN/Inf) for out-of-range values.

    Returns:
        Tuple containing:
            - z: State grid in levels, shape ``(nz,)``, strictly increasing.
            - p_matrix: Transition matrix ``P[i, j] = Pr(j | i)``,
              shape ``(nz, nz)``.

    Raises:
        ValueError: If ``validate`` is True and the parameters are invalid,
            or if ``nz < 2`` (no grid step exists).
    """
    if validate:
        validate_ar1_params(params)
    nz = int(params.nz)
    if nz < 2:
        raise ValueError(f"nz must be at least 2 to define a grid, got {nz}")

    mu = tf.constant(params.mu, dtype=TENSORFLOW_DTYPE)
    rho = tf.constant(params.rho, dtype=TENSORFLOW_DTYPE)
    sigma = tf.constant(params.sigma, dtype=TENSORFLOW_DTYPE)
    lam = tf.constant(params.lambda_, dtype=TENSORFLOW_DTYPE)
    one = tf.constant(1.0, dtype=TENSORFLOW_DTYPE)

    # Stationary moments of the log process
    sigma_z = sigma / tf.sqrt(one - rho ** 2)
    mu_z = mu / (one - rho)

    z_min = mu_z - lam * sigma_z
    z_max = mu_z + lam * sigma_z
    z_step = (z_max - z_min) / tf.cast(nz - 1, TENSORFLOW_DTYPE)

    z = tf.exp(z_min + z_step * tf.range(nz, dtype=TENSORFLOW_DTYPE))

    p_matrix = _build_transition_matrix(
        tf.math.log(z), z_min, z_step, mu, rho, sigma
    )
    return z, p_matrix


def _build_transition_matrix(
    log_z: Tensor,
    z_min: Tensor,
    z_step: Tensor,
    mu: Tensor,
    rho: Tensor,
    sigma: Tensor
) -> Tensor:
    """
    Build the Markov transition matrix for the discretized process.

    Args:
        log_z: Log of the level grid, shape ``(nz,)``.
        z_min: Lower end of the log grid.
        z_step: Log grid spacing.
        mu: AR(1) intercept.
        rho: AR(1) persistence.
        sigma: Innovation standard deviation.

    Returns:
        Transition matrix with rows summing to one, shape ``(nz, nz)``.
    """
    nz = log_z.shape[0]
    sqrt2 = tf.sqrt(tf.constant(2.0, dtype=TENSORFLOW_DTYPE))
    half_bin = 0.5 * z_step / sigma

    # x_j is next state along columns, x_i is current state along rows
    x_j = log_z[None, :]
    x_i = log_z[:, None]

    centred = (x_j - mu - rho * x_i) / sigma
    upper = centred + half_bin
    lower = centred - half_bin

    # Interior bins: CDF mass between the two bin edges
    p_middle = 0.5 * tf.math.erf(upper / sqrt2) - 0.5 * tf.math.erf(lower / sqrt2)

    # Bottom bin: everything below the upper edge of the first bin
    arg0 = (z_min - mu - rho * x_i) / sigma + half_bin
    p_col0 = 0.5 + 0.5 * tf.math.erf(arg0 / sqrt2)

    body = tf.concat([p_col0, p_middle[:, 1:nz - 1]], axis=1)

    # Top bin: residual mass of each row
    p_coln = 1.0 - tf.reduce_sum(body, axis=1, keepdims=True)
    p_coln = tf.clip_by_value(p_coln, 0.0, 1.0)

    return tf.concat([body, p_coln], axis=1)


# ═══════════════════════════════════════════════════════════════════════════
#  Flat buffer layout
# ═══════════════════════════════════════════════════════════════════════════

def flatten_transition_matrix(p_matrix: Tensor) -> Tensor:
    """Lay out ``P[i, j]`` as the flat vector ``P[i + nz * j]``."""
    return tf.reshape(tf.transpose(p_matrix), [-1])


def unflatten_transition_matrix(p_flat: Tensor, nz: int) -> Tensor:
    """Inverse of ``flatten_transition_matrix``."""
    return tf.transpose(tf.reshape(p_flat, [nz, nz]))


def ar1(
    params: ModelParams,
    z_out: Buffer,
    p_out: Buffer,
    validate: bool = True
) -> None:
    """
    Compute the discrete AR(1) grid and transition matrix into buffers.

    All checks run, and all values are computed, before either buffer is
    written, so a failed call leaves both buffers untouched.

    Args:
        params: Model parameters (read only).
        z_out: Pre-allocated buffer of length ``nz`` receiving the grid.
        p_out: Pre-allocated buffer of length ``nz * nz`` receiving the
            transition matrix, with ``p_out[i + nz * j] = Pr(j | i)``.
        validate: If False, skip parameter checks (buffer checks always run).

    Raises:
        ValueError: On invalid parameters or mis-sized buffers.
        TypeError: On unsupported buffer types or non-floating dtypes.
    """
    if validate:
        validate_ar1_params(params)
    nz = int(params.nz)
    validate_buffers(nz, z_out, p_out)

    z, p_matrix = tauchen_discretization(params, validate=False)
    p_flat = flatten_transition_matrix(p_matrix)

    write_buffer(z_out, z)
    write_buffer(p_out, p_flat)
    logger.debug(
        f"AR1 discretized: nz={nz}, rho={params.rho}, sigma={params.sigma}, "
        f"Z in [{float(z[0]):.6g}, {float(z[-1]):.6g}]"
    )
