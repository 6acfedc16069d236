"""Routers HTTP."""
