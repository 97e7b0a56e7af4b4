"""Project file cleanup and structure analysis."""

__version__ = "0.1.0"
