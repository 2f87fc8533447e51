"""
Training-step mixin: the fused rprop update.

Weight decay needs no dedicated kernel (it is two functor applications, see
`densekit.infrastructure.optimizers._weight_decay`); rprop does, because its
branch on sign agreement has to read and write four buffers per element.
"""

from abc import ABC


class BufferMixinTraining(ABC):
    """Training-step kernels, called on the weight buffer."""

    def _rprop(self, gradient, prev_sign, step_size, eta_plus, eta_minus, step_max, step_min) -> None:
        """
        Apply one rprop update to this weight buffer, in place.

        All hyper-parameters arrive already cast to the weight dtype. See
        `densekit.rprop` for the per-element rule.
        """
        ...
