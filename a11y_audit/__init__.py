"""Declarative accessibility rule engine for UI semantic trees."""

__version__ = "0.1.0"
