"""
Integration tests package.

Tests de integración que verifican:
- Adaptadores SQL sobre SQLite in-memory (aiosqlite): ledger, proyección,
  idempotencia y rollback del SQLAlchemyTransactionManager
- Reintento automático ante deadlocks

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
