"""Database Infrastructure — the SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engine and sessions are owned by SqlProductStore (infrastructure/store.py), not this package

Design Decisions:
    - asyncpg driver for the hosted PostgreSQL (native async, no thread pool overhead)
"""
