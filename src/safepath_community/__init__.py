"""SafePath community discussion feed."""

__version__ = "0.1.0"
