"""
Resilient backpropagation (rprop) update and optimizer.

rprop adapts a per-element step size from the sign history of the gradient
and ignores the gradient's magnitude entirely:

- signs agree with the previous step: the step grows (``* eta_plus``),
  capped at ``step_max``
- signs disagree: the step shrinks (``* eta_minus``), floored at
  ``step_min``, and the weight is left unchanged for this element
- otherwise the weight moves by ``-sign(gradient) * step``

The previous sign is stored as an integer buffer; 0 means "no history",
which is how every element starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from ...domain._errors import ShapeMismatchError, UnsupportedOperationError
from ..ops._checks import (
    require_buffers,
    require_same_device,
    require_same_dtype,
    require_same_shape,
)


def _check_rprop_hyperparams(eta_plus, eta_minus, step_max, step_min) -> None:
    if not eta_plus > 1.0:
        raise ValueError(f"eta_plus must be > 1, got {eta_plus}")
    if not (0.0 < eta_minus < 1.0):
        raise ValueError(f"eta_minus must be in (0,1), got {eta_minus}")
    if not step_min > 0.0:
        raise ValueError(f"step_min must be > 0, got {step_min}")
    if not step_max >= step_min:
        raise ValueError(f"step_max must be >= step_min, got {step_max} < {step_min}")


def rprop(
    weight,
    gradient,
    prev_sign,
    step_size,
    *,
    eta_plus: float = 1.2,
    eta_minus: float = 0.5,
    step_max: float = 50.0,
    step_min: float = 1e-6,
) -> None:
    """
    Apply one rprop update in place.

    Parameters
    ----------
    weight : DenseBuffer
        Weights, updated in place.
    gradient : DenseBuffer
        Current gradient; read-only.
    prev_sign : DenseBuffer
        Integer buffer of previous gradient signs in {-1, 0, 1}; overwritten
        with ``sign(gradient)``.
    step_size : DenseBuffer
        Per-element step sizes, updated in place.
    eta_plus, eta_minus : float
        Step growth (> 1) and shrink (in (0, 1)) factors.
    step_max, step_min : float
        Step bounds, ``0 < step_min <= step_max``.

    Raises
    ------
    ShapeMismatchError
        If the four buffers do not share one shape. Nothing is modified.
    MemorySpaceMismatchError
        If the buffers do not share one device.
    UnsupportedOperationError
        If `prev_sign` is not an integer buffer, or `weight`, `gradient` and
        `step_size` do not share one float dtype.
    ValueError
        If a hyper-parameter is out of range.
    """
    require_buffers("rprop", weight, gradient, prev_sign, step_size)
    _check_rprop_hyperparams(eta_plus, eta_minus, step_max, step_min)
    require_same_shape("rprop", weight, gradient, prev_sign, step_size)
    require_same_device("rprop", weight, gradient, prev_sign, step_size)
    if not np.issubdtype(np.dtype(prev_sign.dtype), np.integer):
        raise UnsupportedOperationError(
            "rprop", f"prev_sign must be an integer buffer, got {np.dtype(prev_sign.dtype)}"
        )
    if not np.issubdtype(np.dtype(weight.dtype), np.floating):
        raise UnsupportedOperationError(
            "rprop", f"weights must be floating point, got {np.dtype(weight.dtype)}"
        )
    require_same_dtype("rprop", weight, gradient, step_size)

    t = np.dtype(weight.dtype).type
    weight._rprop(
        gradient,
        prev_sign,
        step_size,
        t(eta_plus),
        t(eta_minus),
        t(step_max),
        t(step_min),
    )


@dataclass
class RProp:
    """
    rprop optimizer owning the per-element state of its weights.

    For every managed weight buffer the optimizer allocates, on the weight's
    own device:

    - ``prev_sign``: int8, zero-filled ("no history")
    - ``step_size``: weight dtype, filled with `initial_step`

    Parameters
    ----------
    weights : Iterable[DenseBuffer]
        Weight buffers to optimize. The iterable is consumed and stored.
    initial_step : float, optional
        Starting step size. Must be in ``[step_min, step_max]``. Defaults to
        0.1.
    eta_plus, eta_minus, step_max, step_min : float, optional
        See `rprop`.

    Raises
    ------
    ValueError
        If any hyper-parameter is outside its valid range.
    """

    weights: Sequence
    initial_step: float = 0.1
    eta_plus: float = 1.2
    eta_minus: float = 0.5
    step_max: float = 50.0
    step_min: float = 1e-6

    def __init__(
        self,
        weights: Iterable,
        *,
        initial_step: float = 0.1,
        eta_plus: float = 1.2,
        eta_minus: float = 0.5,
        step_max: float = 50.0,
        step_min: float = 1e-6,
    ) -> None:
        self.weights = list(weights)
        self.initial_step = float(initial_step)
        self.eta_plus = float(eta_plus)
        self.eta_minus = float(eta_minus)
        self.step_max = float(step_max)
        self.step_min = float(step_min)

        _check_rprop_hyperparams(self.eta_plus, self.eta_minus, self.step_max, self.step_min)
        if not (self.step_min <= self.initial_step <= self.step_max):
            raise ValueError(
                f"initial_step must be in [{self.step_min}, {self.step_max}], "
                f"got {self.initial_step}"
            )

        self._prev_signs: List = []
        self._step_sizes: List = []
        for w in self.weights:
            require_buffers("RProp", w)
            prev = type(w)(w.height, w.width, dtype=np.int8, layout=w.layout, context=w.context)
            prev.fill(0)
            step = type(w)(w.height, w.width, dtype=w.dtype, layout=w.layout, context=w.context)
            step.fill(self.initial_step)
            self._prev_signs.append(prev)
            self._step_sizes.append(step)

    @property
    def prev_signs(self) -> List:
        """Per-weight previous-sign buffers, in `weights` order."""
        return list(self._prev_signs)

    @property
    def step_sizes(self) -> List:
        """Per-weight step-size buffers, in `weights` order."""
        return list(self._step_sizes)

    def step(self, gradients: Sequence) -> None:
        """
        Apply one rprop update to every managed weight.

        Parameters
        ----------
        gradients : Sequence[DenseBuffer]
            One gradient per weight, in `weights` order. ``None`` entries
            are skipped.

        Raises
        ------
        ShapeMismatchError
            If the number of gradients differs from the number of weights.
        """
        gradients = list(gradients)
        if len(gradients) != len(self.weights):
            raise ShapeMismatchError(
                "RProp.step",
                [(len(self.weights),), (len(gradients),)],
                "expected one gradient per weight",
            )
        for w, g, prev, step in zip(self.weights, gradients, self._prev_signs, self._step_sizes):
            if g is None:
                continue
            rprop(
                w,
                g,
                prev,
                step,
                eta_plus=self.eta_plus,
                eta_minus=self.eta_minus,
                step_max=self.step_max,
                step_min=self.step_min,
            )
