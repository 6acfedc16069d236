"""Repositorios SQLAlchemy (Core) sobre AsyncSession."""
