# vfi_models/vfi/grids/__init__.py
"""
Grid management for VFI models.

This package provides utilities for constructing discretized state
space grids: Tauchen's AR(1) discretization (tensor and caller-buffer
forms) and the capital grid builder.
"""

from vfi_models.vfi.grids.grid_builder import GridBuilder
from vfi_models.vfi.grids.tauchen import (
    ar1,
    flatten_transition_matrix,
    tauchen_discretization,
    unflatten_transition_matrix,
    validate_ar1_params,
    validate_buffers,
)

__all__ = [
    'GridBuilder',
    # Tauchen AR(1) discretization
    'ar1',
    'tauchen_discretization',
    'validate_ar1_params',
    'validate_buffers',
    # Flat transition-matrix layout
    'flatten_transition_matrix',
    'unflatten_transition_matrix',
]
