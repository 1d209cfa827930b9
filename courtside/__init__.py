"""Courtside: client-side domain stores for sports venue and academy booking."""

__version__ = "0.1.0"
