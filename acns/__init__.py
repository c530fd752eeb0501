"""
ACNS AI backend package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes, dependencies and HTTP handling
- core/      : Configuration, logging, errors and cross-cutting utilities
- services/  : AI orchestration (chat, search, generation, summaries)
- llm/       : Gemini integration, key rotation and prompt management
- database/  : Async SQLAlchemy models and read-only content queries
- memory/    : In-memory conversation sessions with TTL eviction
- models/    : Pydantic models for request/response schemas
"""

__version__ = "1.0.0"
