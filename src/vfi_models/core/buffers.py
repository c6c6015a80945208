"""Caller-owned output buffers.

Grid routines that follow the buffer contract write into storage the
caller allocated up front: a ``tf.Variable`` (placed on whatever device
the caller chose) or a host ``numpy.ndarray``.  These helpers inspect and
fill either kind without reallocating it.
"""

from typing import Tuple

import numpy as np
import tensorflow as tf

from vfi_models.core.types import Buffer, Tensor


def buffer_shape(buffer: Buffer, name: str) -> Tuple[int, ...]:
    """Return the static shape of ``buffer``.

    Raises
    ------
    TypeError
        If *buffer* is neither a ``tf.Variable`` nor an ndarray, or does
        not hold floating-point values.
    ValueError
        If *buffer* is a read-only ndarray.
    """
    if isinstance(buffer, tf.Variable):
        if not buffer.dtype.is_floating:
            raise TypeError(
                f"{name} buffer must have a floating dtype, got {buffer.dtype.name}"
            )
        return tuple(buffer.shape.as_list())
    if isinstance(buffer, np.ndarray):
        if not np.issubdtype(buffer.dtype, np.floating):
            raise TypeError(
                f"{name} buffer must have a floating dtype, got {buffer.dtype}"
            )
        if not buffer.flags.writeable:
            raise ValueError(f"{name} buffer is read-only")
        return buffer.shape
    raise TypeError(
        f"{name} must be a tf.Variable or numpy.ndarray, "
        f"got {type(buffer).__name__}"
    )


def check_buffer(buffer: Buffer, name: str, length: int) -> None:
    """Raise ``ValueError`` unless *buffer* is 1-D with *length* slots."""
    shape = buffer_shape(buffer, name)
    if shape != (length,):
        raise ValueError(
            f"{name} buffer must have shape ({length},), got {shape}"
        )


def write_buffer(buffer: Buffer, values: Tensor) -> None:
    """Overwrite *buffer* in place, casting to its floating dtype."""
    if isinstance(buffer, tf.Variable):
        buffer.assign(tf.cast(values, buffer.dtype))
    else:
        buffer[...] = values.numpy()
