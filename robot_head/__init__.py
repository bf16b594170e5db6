"""Robot head: a duplex voice assistant protocol, server pipeline and client."""

__version__ = "0.1.0"

__all__ = ["__version__"]
