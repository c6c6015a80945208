"""Markov-chain utilities for the discretized productivity process.

Operate on a transition matrix ``P[i, j] = Pr(j | i)`` as returned by
``tauchen_discretization``: the ergodic distribution of the chain, and
simulation of productivity index paths.
"""

from __future__ import annotations

import logging
from typing import Optional

import tensorflow as tf
import tensorflow_probability as tfp

from vfi_models.core.types import TENSORFLOW_DTYPE, Tensor

tfd = tfp.distributions

logger = logging.getLogger(__name__)


def stationary_distribution(
    p_matrix: Tensor,
    tol: float = 1e-12,
    max_iter: int = 100_000,
) -> Tensor:
    """Ergodic distribution of the chain by power iteration.

    Iterates :math:`\\pi_{t+1} = \\pi_t P` from the uniform distribution
    until :math:`\\|\\pi_{t+1} - \\pi_t\\|_\\infty < \\text{tol}`.

    Parameters
    ----------
    p_matrix : Tensor
        Row-stochastic matrix, shape ``(n, n)``.
    tol : float
        Convergence tolerance (sup-norm).
    max_iter : int
        Maximum number of iterations.

    Returns
    -------
    Tensor
        Probability vector of shape ``(n,)``.

    Raises
    ------
    ValueError
        If *p_matrix* is not square, or *tol* / *max_iter* is non-positive.
    """
    p = tf.cast(p_matrix, TENSORFLOW_DTYPE)
    if p.shape.rank != 2 or p.shape[0] != p.shape[1]:
        raise ValueError(f"Transition matrix must be square, got {p.shape}.")
    if tol <= 0.0:
        raise ValueError(f"Tolerance must be positive, got {tol}.")
    if max_iter <= 0:
        raise ValueError(f"max_iter must be positive, got {max_iter}.")

    n = p.shape[0]
    pi = tf.fill([1, n], tf.constant(1.0 / n, dtype=TENSORFLOW_DTYPE))

    for iteration in range(max_iter):
        pi_next = tf.matmul(pi, p)
        diff = float(tf.reduce_max(tf.abs(pi_next - pi)))
        pi = pi_next
        if diff < tol:
            logger.debug(
                f"Stationary distribution converged in {iteration + 1} iterations."
            )
            break
    else:
        logger.warning(
            f"Stationary distribution did not converge after {max_iter} "
            f"iterations (final diff={diff:.2e})."
        )

    pi = tf.reshape(pi, [-1])
    return pi / tf.reduce_sum(pi)


def _as_stateless_seed(seed: Optional[int]) -> Tensor:
    if seed is None:
        return tfp.random.sanitize_seed(None)
    return tf.constant([0, seed], dtype=tf.int32)


def simulate_chain(
    p_matrix: Tensor,
    n_steps: int,
    n_paths: int = 1,
    initial_index: Optional[int] = None,
    seed: Optional[int] = None,
) -> Tensor:
    """Simulate productivity index paths on the discretized chain.

    Parameters
    ----------
    p_matrix : Tensor
        Row-stochastic matrix, shape ``(n, n)``.
    n_steps : int
        Path length, including the initial state.
    n_paths : int
        Number of independent paths.
    initial_index : int, optional
        Starting state for every path; defaults to the middle state.
    seed : int, optional
        Seed for reproducible paths.

    Returns
    -------
    Tensor
        ``int32`` tensor of state indices, shape ``(n_paths, n_steps)``.

    Raises
    ------
    ValueError
        If *n_steps* or *n_paths* is non-positive, or *initial_index* is
        out of range.
    """
    p = tf.cast(p_matrix, TENSORFLOW_DTYPE)
    n = int(p.shape[0])
    if n_steps <= 0 or n_paths <= 0:
        raise ValueError(
            f"n_steps and n_paths must be positive, got {n_steps}, {n_paths}."
        )
    if initial_index is None:
        initial_index = n // 2
    if not 0 <= initial_index < n:
        raise ValueError(
            f"initial_index must be in [0, {n}), got {initial_index}."
        )

    seed = _as_stateless_seed(seed)
    idx = tf.fill([n_paths], tf.constant(initial_index, dtype=tf.int32))
    path = [idx]

    for _ in range(n_steps - 1):
        seed, step_seed = tfp.random.split_seed(seed)
        rows = tf.gather(p, idx)
        idx = tfd.Categorical(probs=rows).sample(seed=step_seed)
        idx = tf.cast(idx, tf.int32)
        path.append(idx)

    return tf.stack(path, axis=1)
