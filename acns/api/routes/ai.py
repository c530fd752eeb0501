"""
AI Routes - Chatbot, smart search, quick actions, summaries and drafts.

All routes share a per-IP rate limit. Chat and quick actions detect an
admin token when one is sent; content generation requires it.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from acns.api.dependencies import get_ai_service, optional_admin, rate_limit, require_admin
from acns.core.exceptions import ValidationError
from acns.core.logging_config import get_logger
from acns.core.validators import validate_session_id
from acns.models.ai import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    QuickActionsResponse,
    SearchResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from acns.services import AIService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/ai",
    tags=["AI"],
    dependencies=[Depends(rate_limit)],
    responses={
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "AI service request failed"},
        503: {"model": ErrorResponse, "description": "AI service not configured"},
    },
)


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Send a message to the assistant",
    description="""
    Conversational assistant with session memory.

    Include the `session_id` from a previous response to continue a
    conversation. Sessions expire after 30 minutes of inactivity.
    """,
)
async def chat(
    request: ChatRequest,
    admin: Optional[Dict[str, Any]] = Depends(optional_admin),
    service: AIService = Depends(get_ai_service),
) -> ChatResponse:
    is_valid, error = validate_session_id(request.session_id)
    if not is_valid:
        raise ValidationError(error, field="session_id")

    return await service.chat(
        message=request.message,
        session_id=request.session_id,
        is_admin=admin is not None,
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search site content",
)
async def search(
    q: str = Query(..., description="Search terms, at least 2 characters"),
    service: AIService = Depends(get_ai_service),
) -> SearchResponse:
    return await service.search(q)


@router.get(
    "/quick-actions",
    response_model=QuickActionsResponse,
    summary="Contextual suggestions for the chatbot UI",
)
async def quick_actions(
    page: str = Query("home", max_length=50),
    admin: Optional[Dict[str, Any]] = Depends(optional_admin),
    service: AIService = Depends(get_ai_service),
) -> QuickActionsResponse:
    return await service.quick_actions(page=page, is_admin=admin is not None)


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    summary="Summarize a blog post, service or product",
    responses={404: {"model": ErrorResponse, "description": "Content not found"}},
)
async def summarize(
    request: SummarizeRequest,
    service: AIService = Depends(get_ai_service),
) -> SummarizeResponse:
    return await service.summarize(request.type, request.id)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Draft content with AI (admin only)",
    responses={401: {"model": ErrorResponse, "description": "Admin token required"}},
)
async def generate(
    request: GenerateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    service: AIService = Depends(get_ai_service),
) -> GenerateResponse:
    logger.info(f"Content generation requested by {admin['email']}: type={request.type}")
    return await service.generate(request.type, request.prompt, request.tone)
