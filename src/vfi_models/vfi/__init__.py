"""Building blocks for Value Function Iteration (VFI) models.

This package provides:

* :class:`GridBuilder`: productivity, capital and initial-value grids.
* :func:`ar1`: Tauchen discretization of the log-AR(1) productivity
  process into caller-owned (host or device) buffers.

Sub-packages
------------
grids
    Tauchen discretization and grid construction.

Modules
-------
value_init
    Initial value-function guess.
markov
    Stationary distribution and simulation of the discretized chain.
"""

from vfi_models.vfi.grids import GridBuilder, ar1, tauchen_discretization
from vfi_models.vfi.markov import simulate_chain, stationary_distribution
from vfi_models.vfi.value_init import initialize_value_function, vf_init

__all__ = [
    "GridBuilder",
    "ar1",
    "initialize_value_function",
    "simulate_chain",
    "stationary_distribution",
    "tauchen_discretization",
    "vf_init",
]
