# vfi_models/econ/__init__.py
"""
Core economic logic module.

This package provides the economic formulas used to size the capital
grid and seed value-function iteration.
"""

from vfi_models.econ.steady_state import SteadyStateCalculator


__all__ = [
    'SteadyStateCalculator',
]
