"""Property listing wizard backend."""

__version__ = "0.1.0"
