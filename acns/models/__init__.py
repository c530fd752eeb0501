"""
Models module - Schemas and data transfer objects.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
- Internal models: LiveContext, passed from the data layer to prompts
"""
from acns.models.ai import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HealthResponse,
    QuickActionsResponse,
    SearchResponse,
    SearchResults,
    SummarizeRequest,
    SummarizeResponse,
)
from acns.models.context import LiveContext

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "GenerateRequest",
    "GenerateResponse",
    "HealthResponse",
    "QuickActionsResponse",
    "SearchResponse",
    "SearchResults",
    "SummarizeRequest",
    "SummarizeResponse",
    "LiveContext",
]
