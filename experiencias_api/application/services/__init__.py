"""Servicios del motor de workflow."""
