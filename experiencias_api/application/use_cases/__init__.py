"""Casos de uso: una clase por operación expuesta del motor."""
