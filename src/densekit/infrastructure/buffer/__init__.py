from ._dense_buffer import DenseBuffer

__all__ = [DenseBuffer.__name__]
