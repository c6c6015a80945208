"""Core utilities shared by the VFI building blocks.

Provide the global precision settings, buffer type aliases and the
wall-clock timer used to instrument grid construction.
"""

from vfi_models.core.types import TENSORFLOW_DTYPE, NUMPY_DTYPE, Tensor, Array, Buffer
from vfi_models.core.timing import Timer

__all__ = [
    'TENSORFLOW_DTYPE',
    'NUMPY_DTYPE',
    'Tensor',
    'Array',
    'Buffer',
    'Timer',
]
