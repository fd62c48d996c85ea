"""ISO 286 tolerance and fit calculator."""

__version__ = "1.0.0"
