"""Schemas pydantic de la API."""
