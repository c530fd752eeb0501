"""
Live Context Fetcher - Snapshot of site content for the chatbot prompt.

Five read-only queries run concurrently; the snapshot is rebuilt on
every call and never cached.
"""
import asyncio

from acns.core.logging_config import get_logger
from acns.database.repository import ContentRepository
from acns.models.context import LiveContext
from acns.services.outcome import Outcome, attempt

logger = get_logger(__name__)

SERVICE_LIMIT = 10
BLOG_LIMIT = 5
JOB_LIMIT = 10
PRODUCT_LIMIT = 10


class LiveContextFetcher:
    """Builds LiveContext snapshots from the content repository."""

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    async def _load(self) -> LiveContext:
        settings, services, blogs, jobs, products = await asyncio.gather(
            self.repository.get_settings_context(),
            self.repository.list_active_services(limit=SERVICE_LIMIT),
            self.repository.list_recent_blogs(limit=BLOG_LIMIT),
            self.repository.list_active_jobs(limit=JOB_LIMIT),
            self.repository.list_active_products(limit=PRODUCT_LIMIT),
        )
        return LiveContext(
            settings=settings,
            services=services,
            recent_blogs=blogs,
            active_jobs=jobs,
            products=products,
        )

    async def fetch(self) -> Outcome[LiveContext]:
        """Load the snapshot, capturing any query failure."""
        return await attempt(self._load(), "Live context fetch")

    async def fetch_or_empty(self) -> LiveContext:
        """Snapshot, or an empty context when any query fails."""
        return (await self.fetch()).unwrap_or(LiveContext.empty())
