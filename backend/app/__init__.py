"""
Inventory API: Application Package Initializer
================================================

What: Marks the `app` directory as a Python package and carries the version.
Who:  Imported by uvicorn, Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │  Routes (API Layer)                 │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Middleware (request ID, access     │
    │  log, bearer token dependency)      │
    ├─────────────────────────────────────┤
    │  Services (Business Logic)          │  ← auth, kategori, produk,
    │                                     │    stok, files, tokens
    ├─────────────────────────────────────┤
    │  Models & Schemas (Data)            │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │  Database (Persistence)             │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
