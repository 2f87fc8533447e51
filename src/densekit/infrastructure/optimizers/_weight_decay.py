"""
Gradient step with decoupled multiplicative weight decay.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import UnsupportedOperationError
from ...domain._functors import BinaryFunctor, ScalarFunctor
from ..ops._checks import (
    cast_params,
    require_buffers,
    require_same_device,
    require_same_dtype,
    require_same_shape,
)


def weight_decay(weight, gradient, learning_rate, decay_rate) -> None:
    """
    Gradient step followed by weight decay, in place.

    ``weight <- (weight - learning_rate * gradient) * (1 - decay_rate)``

    Both backends run the same two functor applications, ``AXPY`` with
    ``-learning_rate`` and then ``MULT`` with ``1 - decay_rate``, so they
    round identically.

    Raises
    ------
    ShapeMismatchError
        If the shapes differ. `weight` is left unmodified.
    MemorySpaceMismatchError
        If the buffers live on different devices.
    UnsupportedOperationError
        If the dtypes differ or are not floating point.
    ValueError
        If ``learning_rate <= 0`` or `decay_rate` is outside ``[0, 1)``.
    """
    require_buffers("weight_decay", weight, gradient)
    if not learning_rate > 0.0:
        raise ValueError(f"learning_rate must be > 0, got {learning_rate}")
    if not (0.0 <= decay_rate < 1.0):
        raise ValueError(f"decay_rate must be in [0,1), got {decay_rate}")
    require_same_shape("weight_decay", weight, gradient)
    require_same_device("weight_decay", weight, gradient)
    require_same_dtype("weight_decay", weight, gradient)
    if not np.issubdtype(np.dtype(weight.dtype), np.floating):
        raise UnsupportedOperationError(
            "weight_decay", f"weights must be floating point, got {np.dtype(weight.dtype)}"
        )

    weight._apply_binary(gradient, BinaryFunctor.AXPY, cast_params("weight_decay", weight.dtype, [-learning_rate]))
    if decay_rate != 0.0:
        weight._apply_scalar(ScalarFunctor.MULT, cast_params("weight_decay", weight.dtype, [1.0 - decay_rate]))
