"""Goiki: a small wiki whose pages live in a git working tree."""

__version__ = "0.1.0"
