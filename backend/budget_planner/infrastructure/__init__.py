"""Infrastructure — async session management, store adapter, logging setup.

Invariants:
    - Single async engine per process (initialized via init_db, disposed via close_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
