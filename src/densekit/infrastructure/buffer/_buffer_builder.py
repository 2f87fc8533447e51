"""
Buffer control-path manager for memory-space dispatch.

Every kernel method on `DenseBuffer` is declared once on a mixin and
implemented twice, once per memory space:

    @buffer_control_path_manager(Mixin, Mixin._op, MemorySpace.LOCAL)
    def _op_host(self, ...): ...

    @buffer_control_path_manager(Mixin, Mixin._op, MemorySpace.ACCELERATOR)
    def _op_cuda(self, ...): ...

At runtime ``buffer._op(...)`` runs the implementation registered for
``buffer._state``, which is the buffer's memory space.
"""

from ...domain._errors import UnsupportedOperationError
from ...domain.utils._control_path import create_path_builder

_path_builder = create_path_builder()


def _missing_path(method, state) -> None:
    raise UnsupportedOperationError(
        method.__name__.lstrip("_"), f"no kernel registered for memory space {state}"
    )


def buffer_control_path_manager(cls, method, state):
    """Register a kernel implementation of `method` for memory space `state`."""
    return _path_builder(cls, method, state, trap_exception=_missing_path)
