"""Follow and filter a growing log in the terminal."""

__version__ = "0.1.0"
