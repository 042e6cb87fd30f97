"""
Integration tests package.

Tests de integración que verifican:
- Adaptadores SQL (catálogo, reservas, store del motor, idempotencia) sobre SQLite
- Reintentos ante deadlocks / lock wait timeouts / serialization failures

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
