"""Task tracker: REST task service and terminal client."""

__version__ = "0.1.0"
