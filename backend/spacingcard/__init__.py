"""
SpacingCard — Package Initializer
===================================

What: Spacing editor for design-tool components: a REST API over one table
      plus a headless form client that edits it.

Architecture Note:

    ┌─────────────────────────────────────┐
    │   Form client (client/)             │  ← state machine, debounce, httpx
    ├─────────────────────────────────────┤
    │   Routes (API Layer)                │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Data Access)            │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
