"""
Tremu Backend — Application Package
====================================

What: Kanban-style task-board API (boards, columns, tasks, board members).
Who:  Imported by uvicorn (``tremu.main:app``), Alembic, and pytest.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (authorization, rules)   │  ← membership checks, ordering
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
