"""
Service Container - Builds and owns the long-lived application objects.

One container lives on ``app.state`` for the life of the process. It
replaces module-level singletons so tests can build isolated instances.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from acns.core.config import Settings
from acns.core.logging_config import get_logger
from acns.core.rate_limiter import RateLimiter
from acns.database import ContentRepository, Database
from acns.llm import GeminiClient, KeyPool
from acns.memory import SessionStore
from acns.services import AIService

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    database: Database
    repository: ContentRepository
    key_pool: KeyPool
    session_store: SessionStore
    llm: GeminiClient
    ai_service: AIService
    rate_limiter: RateLimiter

    async def startup(self) -> None:
        """Create tables when configured and start the session sweep."""
        if self.settings.auto_create_tables:
            await self.database.create_tables()
        self.session_store.start()

    async def shutdown(self) -> None:
        """Stop the session sweep, then close Gemini clients and the connection pool."""
        await self.session_store.stop()
        await self.llm.close()
        await self.database.close()


def build_container(
    settings: Settings,
    client_factory: Optional[Callable[[str], Any]] = None,
) -> ServiceContainer:
    """
    Wire every collaborator from settings.

    Args:
        settings: Application settings
        client_factory: Optional Gemini SDK client factory (tests inject fakes)
    """
    database = Database(settings.database_url)
    repository = ContentRepository(database)
    key_pool = KeyPool(settings.gemini_keys)
    session_store = SessionStore(
        ttl_minutes=settings.session_ttl_minutes,
        sweep_interval_minutes=settings.session_sweep_minutes,
    )
    llm = GeminiClient(
        key_pool,
        model_name=settings.gemini_model,
        timeout_seconds=settings.gemini_timeout_seconds,
        client_factory=client_factory,
    )
    ai_service = AIService(
        repository,
        llm,
        session_store,
        frontend_url=settings.frontend_url,
    )
    rate_limiter = RateLimiter(requests_per_minute=settings.ai_rate_limit_per_minute)

    logger.info(f"Service container built: gemini_keys={len(key_pool)}")

    return ServiceContainer(
        settings=settings,
        database=database,
        repository=repository,
        key_pool=key_pool,
        session_store=session_store,
        llm=llm,
        ai_service=ai_service,
        rate_limiter=rate_limiter,
    )
