from ._device import Device, MemorySpace

__all__ = [Device.__name__, MemorySpace.__name__]
