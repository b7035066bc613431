"""
Library Ledger.

A single-process ledger of a library's catalog, members and loans, exposed
as an MCP server.

Key Components:
- models: Pydantic models for books, members, borrow records and query results
- ledger: the in-memory stores, the lending state machine and queries
- persistence: SQLAlchemy snapshots of the ledger
- config: Configuration management with pydantic-settings
- resources: MCP resources (read-only endpoints)
- tools: MCP tools (operations with side effects)
"""

__version__ = "0.1.0"

from .ledger import Library

__all__ = [
    "Library",
    "__version__",
]
