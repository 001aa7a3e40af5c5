"""BLOTE — a line-oriented terminal over a synthetic file system."""

__version__ = "1.0.0"
