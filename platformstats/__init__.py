"""Platform statistics for embedded Linux boards."""

__version__ = "0.1.0"
