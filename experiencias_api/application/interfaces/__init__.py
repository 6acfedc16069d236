"""Puertos de la capa de aplicación."""
