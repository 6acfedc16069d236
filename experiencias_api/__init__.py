"""Experiencias API - motor de workflow de reservas de experiencias."""

__version__ = "0.1.0"
