"""Status lifecycle core for the lessons marketplace."""

__version__ = "1.0.0"
