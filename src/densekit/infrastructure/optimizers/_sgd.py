"""
Stochastic Gradient Descent (SGD) optimizer over dense buffers.

Design notes
------------
- The optimizer holds weight buffers only; gradients are passed to `step`,
  since buffers carry no gradient slot.
- Weight decay is decoupled (applied to the weights after the gradient step),
  not classical L2 added to the gradient.
- Updates run on whatever device the weights live on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ...domain._errors import ShapeMismatchError
from ._weight_decay import weight_decay as _weight_decay_step


@dataclass
class SGD:
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each weight ``w`` with gradient ``g``:

        ``w <- (w - lr * g) * (1 - weight_decay)``

    Parameters
    ----------
    weights : Sequence[DenseBuffer]
        Weight buffers to be optimized.
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    weight_decay : float, optional
        Decoupled weight decay factor. Must be in [0, 1). Defaults to 0.0.
    """

    weights: Sequence
    lr: float = 1e-3
    weight_decay: float = 0.0

    def __init__(
        self,
        weights: Iterable,
        *,
        lr: float = 1e-3,
        weight_decay: float = 0.0,
    ) -> None:
        """
        Construct an SGD optimizer.

        Raises
        ------
        ValueError
            If ``lr <= 0`` or `weight_decay` is outside ``[0, 1)``.
        """
        self.weights = list(weights)
        self.lr = float(lr)
        self.weight_decay = float(weight_decay)

        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")
        if not (0.0 <= self.weight_decay < 1.0):
            raise ValueError(f"weight_decay must be in [0,1), got {self.weight_decay}")

    def step(self, gradients: Sequence) -> None:
        """
        Apply one SGD update to every managed weight.

        Parameters
        ----------
        gradients : Sequence[DenseBuffer]
            One gradient per weight, in `weights` order. ``None`` entries
            are skipped.
        """
        gradients = list(gradients)
        if len(gradients) != len(self.weights):
            raise ShapeMismatchError(
                "SGD.step",
                [(len(self.weights),), (len(gradients),)],
                "expected one gradient per weight",
            )
        for w, g in zip(self.weights, gradients):
            if g is None:
                continue
            _weight_decay_step(w, g, self.lr, self.weight_decay)
