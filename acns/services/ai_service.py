"""
AI Service - Orchestration of every Gemini-backed feature.

Operations:
1. chat        : conversational reply with session memory and live context
2. search      : keyword search across content with an optional AI summary
3. generate    : JSON drafts for admin content forms
4. quick_actions: suggestion chips for the chatbot UI
5. summarize   : bullet-point summary of a blog post, service or product

Core operations propagate failures; live context and the search summary
are enrichments and degrade to empty/None instead.
"""
import asyncio
from datetime import datetime
from typing import Optional

from acns.core.exceptions import NotFoundError, ValidationError
from acns.core.logging_config import get_logger
from acns.core.validators import (
    validate_message,
    validate_search_query,
    validate_summary_type,
)
from acns.database.repository import ContentRepository
from acns.llm.client import GeminiClient, SamplingConfig
from acns.llm.prompts import (
    GENERATION_SYSTEM_PROMPT,
    SEARCH_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    build_system_prompt,
    get_generation_prompt,
    get_search_summary_prompt,
    get_summary_prompt,
)
from acns.memory import SessionStore, new_anonymous_session_id
from acns.models.ai import (
    ChatResponse,
    GenerateResponse,
    QuickActionsResponse,
    SearchResponse,
    SearchResults,
    SummarizeResponse,
)
from acns.services.context import LiveContextFetcher
from acns.services.generated import parse_generated
from acns.services.outcome import Outcome, attempt
from acns.services.quick_actions import build_quick_actions

logger = get_logger(__name__)

HISTORY_TURNS = 20

CHAT_SAMPLING = SamplingConfig(temperature=0.7, top_p=0.9, top_k=40, max_output_tokens=2048)
SEARCH_SUMMARY_SAMPLING = SamplingConfig(temperature=0.5, max_output_tokens=256)
GENERATION_SAMPLING = SamplingConfig(temperature=0.8, top_p=0.9, max_output_tokens=4096)
SUMMARY_SAMPLING = SamplingConfig(temperature=0.3, max_output_tokens=512)

CHAT_FALLBACK_REPLY = "I apologize, I could not generate a response. Please try again."
SUMMARY_FALLBACK = "Unable to generate summary."


class AIService:
    """
    Entry points used by the AI routes.

    All collaborators are injected, so tests can give each service its
    own session store and key pool.

    Example:
        >>> service = AIService(repository, gemini, SessionStore())
        >>> response = await service.chat("What services do you offer?", "abc-123")
        >>> response.reply
        'ACNS offers Cloud Infrastructure, ...'
    """

    def __init__(
        self,
        repository: ContentRepository,
        llm: GeminiClient,
        session_store: SessionStore,
        frontend_url: str = "http://localhost:3000",
    ):
        self.repository = repository
        self.llm = llm
        self.session_store = session_store
        self.frontend_url = frontend_url
        self.context_fetcher = LiveContextFetcher(repository)
        logger.info("AIService initialized")

    # ------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------

    async def chat(
        self,
        message: str,
        session_id: Optional[str] = None,
        is_admin: bool = False,
    ) -> ChatResponse:
        """
        Reply to a chat message, remembering the exchange in the session.

        Args:
            message: Visitor message (1..2000 chars after trimming)
            session_id: Existing session id; a new anonymous one when omitted
            is_admin: Whether the caller holds a valid admin token

        Raises:
            ValidationError: If the message is empty or too long
            ConfigurationError: If no Gemini keys are configured
            UpstreamError: If the Gemini call fails
        """
        is_valid, text, error = validate_message(message)
        if not is_valid:
            raise ValidationError(error, field="message")

        self.llm.ensure_configured()
        session_id = session_id or new_anonymous_session_id()

        logger.info(
            f"Processing chat: session={session_id}, "
            f"message_length={len(text)}, admin={is_admin}"
        )

        context = await self.context_fetcher.fetch_or_empty()
        system_prompt = build_system_prompt(context, is_admin, self.frontend_url)

        session = self.session_store.get_or_create(session_id)
        messages = []
        for turn in session.recent_turns(HISTORY_TURNS):
            messages.append(("user", turn.user))
            messages.append(("model", turn.assistant))
        messages.append(("user", text))

        reply = await self.llm.generate(messages, system_prompt, CHAT_SAMPLING)
        if not reply:
            logger.warning(f"Empty Gemini reply for session={session_id}")
            reply = CHAT_FALLBACK_REPLY

        session.add_turn(text, reply)

        logger.info(
            f"Chat processed: session={session_id}, "
            f"reply_length={len(reply)}, turns={session.turn_count}"
        )

        return ChatResponse(reply=reply, session_id=session_id, timestamp=datetime.utcnow())

    # ------------------------------------------------------------
    # Search
    # ------------------------------------------------------------

    async def search(self, query: str) -> SearchResponse:
        """
        Search services, blogs, products and jobs (max 5 hits each).

        Raises:
            ValidationError: If the trimmed query is shorter than 2 characters
        """
        is_valid, term, error = validate_search_query(query)
        if not is_valid:
            raise ValidationError(error, field="q")

        services, blogs, products, jobs = await asyncio.gather(
            self.repository.search_services(term),
            self.repository.search_blogs(term),
            self.repository.search_products(term),
            self.repository.search_jobs(term),
        )

        results = SearchResults(
            services=[{**s, "type": "service"} for s in services],
            blogs=[{**b, "type": "blog"} for b in blogs],
            products=[{**p, "type": "product"} for p in products],
            jobs=[{**j, "type": "job"} for j in jobs],
        )
        total = results.count()
        logger.info(f"Search '{term}': {total} results")

        ai_summary = None
        if total > 0 and self.llm.is_configured:
            ai_summary = (await self._summarize_results(term, results)).unwrap_or(None)

        return SearchResponse(
            query=term,
            total_results=total,
            results=results,
            ai_summary=ai_summary,
        )

    async def _summarize_results(self, term: str, results: SearchResults) -> Outcome[Optional[str]]:
        prompt = get_search_summary_prompt(term, results.model_dump())
        return await attempt(
            self.llm.generate([("user", prompt)], SEARCH_SYSTEM_PROMPT, SEARCH_SUMMARY_SAMPLING),
            "AI search summary",
        )

    # ------------------------------------------------------------
    # Content generation
    # ------------------------------------------------------------

    async def generate(
        self,
        content_type: str,
        prompt: str,
        tone: str = "professional",
    ) -> GenerateResponse:
        """
        Draft content of ``content_type`` as JSON.

        Output that is not valid JSON is returned as ``{"raw": text}``.

        Raises:
            ConfigurationError: If no Gemini keys are configured
            UpstreamError: If the Gemini call fails
        """
        self.llm.ensure_configured()

        instruction = get_generation_prompt(content_type, prompt, tone)
        raw = await self.llm.generate(
            [("user", instruction)], GENERATION_SYSTEM_PROMPT, GENERATION_SAMPLING
        )
        generated = parse_generated(raw or "{}")

        logger.info(f"Generated {content_type} content: format={generated.format}")

        return GenerateResponse(
            type=content_type,
            generated=generated.to_payload(),
            format=generated.format,
            timestamp=datetime.utcnow(),
        )

    # ------------------------------------------------------------
    # Quick actions
    # ------------------------------------------------------------

    async def quick_actions(self, page: str = "home", is_admin: bool = False) -> QuickActionsResponse:
        actions = await build_quick_actions(self.repository, page, is_admin)
        return QuickActionsResponse(page=page, actions=actions, timestamp=datetime.utcnow())

    # ------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------

    async def summarize(self, content_type: str, content_id: str) -> SummarizeResponse:
        """
        Summarize one blog post, service or product in 3-4 bullet points.

        Raises:
            ValidationError: If ``content_type`` is not blog, service or product
            ConfigurationError: If no Gemini keys are configured
            NotFoundError: If no item has ``content_id``
            UpstreamError: If the Gemini call fails
        """
        is_valid, error = validate_summary_type(content_type)
        if not is_valid:
            raise ValidationError(error, field="type")

        self.llm.ensure_configured()

        if content_type == "blog":
            blog = await self.repository.get_blog(content_id)
            if blog is None:
                raise NotFoundError("Blog post not found")
            title, body = blog.title, blog.content
        elif content_type == "service":
            service = await self.repository.get_service(content_id)
            if service is None:
                raise NotFoundError("Service not found")
            title, body = service.name, service.description
        else:
            product = await self.repository.get_product(content_id)
            if product is None:
                raise NotFoundError("Product not found")
            title, body = product.name, product.description

        summary = await self.llm.generate(
            [("user", get_summary_prompt(title, body or ""))],
            SUMMARY_SYSTEM_PROMPT,
            SUMMARY_SAMPLING,
        )

        return SummarizeResponse(
            type=content_type,
            id=content_id,
            title=title,
            summary=summary or SUMMARY_FALLBACK,
            timestamp=datetime.utcnow(),
        )
