"""
Content Repository - Read-only queries used by the AI layer.

Each public coroutine opens its own session, so callers can fan several
of them out with asyncio.gather. Results are returned as plain dicts
(or detached ORM rows for single-item lookups) so nothing holds a
session open after the call returns.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select

from acns.core.logging_config import LoggerMixin
from acns.database.connection import Database
from acns.database.models import AdminUser, Blog, JobOpening, Product, Service, WebsiteSettings

SEARCH_LIMIT = 5


class ContentRepository(LoggerMixin):
    """Read access to settings, services, blogs, jobs, products and admins."""

    def __init__(self, database: Database):
        self.database = database

    async def _all(self, stmt) -> List[Any]:
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _first(self, stmt) -> Optional[Any]:
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    # ------------------------------------------------------------
    # Live context
    # ------------------------------------------------------------

    async def get_settings_context(self) -> Optional[Dict[str, Any]]:
        """Company identity fields from the settings singleton, if present."""
        row = await self._first(select(WebsiteSettings).limit(1))
        return row.to_context() if row else None

    async def list_active_services(self, limit: int = 10) -> List[Dict[str, Any]]:
        stmt = (
            select(Service)
            .where(Service.is_active.is_(True))
            .order_by(Service.sort_order.asc())
            .limit(limit)
        )
        return [s.to_summary() for s in await self._all(stmt)]

    async def list_recent_blogs(self, limit: int = 5) -> List[Dict[str, Any]]:
        stmt = (
            select(Blog)
            .where(Blog.is_published.is_(True))
            .order_by(Blog.created_at.desc())
            .limit(limit)
        )
        return [b.to_summary() for b in await self._all(stmt)]

    async def list_active_jobs(self, limit: int = 10) -> List[Dict[str, Any]]:
        stmt = select(JobOpening).where(JobOpening.is_active.is_(True)).limit(limit)
        return [j.to_summary() for j in await self._all(stmt)]

    async def list_active_products(self, limit: int = 10) -> List[Dict[str, Any]]:
        stmt = (
            select(Product)
            .where(Product.is_active.is_(True))
            .order_by(Product.sort_order.asc())
            .limit(limit)
        )
        return [p.to_summary() for p in await self._all(stmt)]

    # ------------------------------------------------------------
    # Search (case-insensitive substring match, wildcards escaped)
    # ------------------------------------------------------------

    async def search_services(self, term: str, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
        stmt = (
            select(Service)
            .where(
                Service.is_active.is_(True),
                or_(
                    Service.name.icontains(term, autoescape=True),
                    Service.description.icontains(term, autoescape=True),
                    Service.short_desc.icontains(term, autoescape=True),
                ),
            )
            .order_by(Service.sort_order.asc())
            .limit(limit)
        )
        return [s.to_summary() for s in await self._all(stmt)]

    async def search_blogs(self, term: str, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
        stmt = (
            select(Blog)
            .where(
                Blog.is_published.is_(True),
                or_(
                    Blog.title.icontains(term, autoescape=True),
                    Blog.content.icontains(term, autoescape=True),
                    Blog.excerpt.icontains(term, autoescape=True),
                    Blog.category.icontains(term, autoescape=True),
                ),
            )
            .order_by(Blog.created_at.desc())
            .limit(limit)
        )
        return [b.to_summary() for b in await self._all(stmt)]

    async def search_products(self, term: str, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
        stmt = (
            select(Product)
            .where(
                Product.is_active.is_(True),
                or_(
                    Product.name.icontains(term, autoescape=True),
                    Product.description.icontains(term, autoescape=True),
                    Product.short_desc.icontains(term, autoescape=True),
                    Product.category.icontains(term, autoescape=True),
                ),
            )
            .order_by(Product.sort_order.asc())
            .limit(limit)
        )
        return [p.to_summary() for p in await self._all(stmt)]

    async def search_jobs(self, term: str, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
        stmt = (
            select(JobOpening)
            .where(
                JobOpening.is_active.is_(True),
                or_(
                    JobOpening.title.icontains(term, autoescape=True),
                    JobOpening.description.icontains(term, autoescape=True),
                    JobOpening.department.icontains(term, autoescape=True),
                    JobOpening.location.icontains(term, autoescape=True),
                ),
            )
            .order_by(JobOpening.created_at.desc())
            .limit(limit)
        )
        return [
            {k: v for k, v in j.to_summary().items() if k != "type"}
            for j in await self._all(stmt)
        ]

    # ------------------------------------------------------------
    # Quick actions
    # ------------------------------------------------------------

    async def latest_blog(self) -> Optional[Dict[str, Any]]:
        """Title and slug of the newest published post."""
        stmt = (
            select(Blog)
            .where(Blog.is_published.is_(True))
            .order_by(Blog.created_at.desc())
            .limit(1)
        )
        blog = await self._first(stmt)
        return {"title": blog.title, "slug": blog.slug} if blog else None

    async def count_active_jobs(self) -> int:
        stmt = select(func.count()).select_from(JobOpening).where(JobOpening.is_active.is_(True))
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    # ------------------------------------------------------------
    # Single items
    # ------------------------------------------------------------

    async def get_blog(self, blog_id: str) -> Optional[Blog]:
        return await self._first(select(Blog).where(Blog.id == blog_id))

    async def get_service(self, service_id: str) -> Optional[Service]:
        return await self._first(select(Service).where(Service.id == service_id))

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self._first(select(Product).where(Product.id == product_id))

    async def get_active_admin(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Admin user dict when the id exists and the account is active."""
        admin = await self._first(select(AdminUser).where(AdminUser.id == user_id))
        if admin is None:
            return None
        if not admin.is_active:
            self.logger.warning(f"Inactive admin presented a token: {user_id}")
            return None
        return admin.to_dict()
