"""Capa de dominio: entidades, reglas del workflow y errores."""
