"""Balanced two-team generation for pickup games."""

__version__ = "0.1.0"
