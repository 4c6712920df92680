"""Helix - contact tag service."""

__version__ = "0.1.0"
