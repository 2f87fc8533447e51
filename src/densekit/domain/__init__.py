"""Backend-independent types: layouts, devices, functors and errors."""
