"""Host and accelerator implementations of the densekit operations."""
