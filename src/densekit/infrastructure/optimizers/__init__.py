"""
Training-step primitives and the optimizers built on them.
"""

from ._rprop import RProp, rprop
from ._sgd import SGD
from ._weight_decay import weight_decay

__all__ = [
    "rprop",
    "weight_decay",
    "RProp",
    "SGD",
]
