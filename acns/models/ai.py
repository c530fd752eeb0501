"""
Request and Response models for the AI API.

These Pydantic models define the contract between client and server.
They provide:
- Type validation
- Automatic documentation
- Request/response serialization
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from acns.core.validators import MAX_MESSAGE_LENGTH

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

GenerationType = Literal["blog", "product", "service", "seo", "email", "social"]
Tone = Literal["professional", "casual", "technical", "friendly", "formal"]


class ChatRequest(BaseModel):
    """
    Request model for the /api/ai/chat endpoint.

    Attributes:
        message: The visitor's message.
        session_id: Optional session identifier for multi-turn conversations.
    """
    message: str = Field(
        ...,
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
        description="The user's message or question",
        examples=["What cloud services do you offer?"]
    )
    session_id: Optional[str] = Field(
        default=None,
        description="Session ID for multi-turn conversations"
    )


class ChatResponse(BaseModel):
    """Assistant reply plus the session it was recorded in."""
    reply: str = Field(..., description="The assistant's response")
    session_id: str = Field(..., description="Session ID for this conversation")
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class SearchResults(BaseModel):
    """Per-type hits; every item carries a ``type`` tag."""
    services: List[Dict[str, Any]] = Field(default_factory=list)
    blogs: List[Dict[str, Any]] = Field(default_factory=list)
    products: List[Dict[str, Any]] = Field(default_factory=list)
    jobs: List[Dict[str, Any]] = Field(default_factory=list)

    def count(self) -> int:
        return len(self.services) + len(self.blogs) + len(self.products) + len(self.jobs)


class SearchResponse(BaseModel):
    query: str
    total_results: int
    results: SearchResults
    ai_summary: Optional[str] = Field(
        default=None,
        description="Short AI summary of the hits; null when unavailable"
    )


class GenerateRequest(BaseModel):
    """Admin request for an AI-written draft."""
    type: GenerationType = Field(..., description="Kind of content to draft")
    prompt: str = Field(..., min_length=5, max_length=1000)
    tone: Tone = Field(default="professional")


class GenerateResponse(BaseModel):
    type: str
    generated: Any = Field(
        ...,
        description="Parsed JSON draft, or {\"raw\": text} when the output was not JSON"
    )
    format: Literal["structured", "raw"]
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class QuickActionsResponse(BaseModel):
    page: str
    actions: List[Dict[str, str]]
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class SummarizeRequest(BaseModel):
    type: str = Field(..., description="One of: blog, service, product")
    id: str = Field(..., pattern=UUID_PATTERN, description="UUID of the content item")


class SummarizeResponse(BaseModel):
    type: str
    id: str
    title: str
    summary: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class HealthResponse(BaseModel):
    """Response model for the /health endpoints."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database: Optional[bool] = None
    gemini_keys: Optional[int] = None


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
