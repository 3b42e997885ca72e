"""
DevConnector Backend — Application Package Initializer
========================================================

What: The `devconnector` package: a developer social network API.
Who:  Imported by uvicorn (`devconnector.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes + Dependencies (API)    │  ← HTTP concerns, Auth Gate
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ownership, like/comment rules
    ├─────────────────────────────────────┤
    │            Repositories             │  ← queries, error translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
