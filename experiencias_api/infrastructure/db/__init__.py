"""Persistencia SQL: tablas, engine, transacciones y reintentos."""
