"""Pillr medication reminder service."""

__version__ = "0.1.0"
