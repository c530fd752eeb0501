"""Shared fixtures for ACNS AI tests."""

import asyncio
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import pytest

# Settings are read when acns.api.main is imported
_TMP = Path(tempfile.mkdtemp(prefix="acns-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP / 'import.db'}")
os.environ.setdefault("LOG_DIR", str(_TMP / "logs"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from acns.core.config import Settings  # noqa: E402
from acns.database import (  # noqa: E402
    AdminUser,
    Blog,
    ContentRepository,
    Database,
    JobOpening,
    Product,
    Service,
    WebsiteSettings,
)
from acns.llm import GeminiClient, KeyPool  # noqa: E402
from acns.memory import SessionStore  # noqa: E402
from acns.services import AIService  # noqa: E402

ADMIN_ID = "11111111-1111-1111-1111-111111111111"
INACTIVE_ADMIN_ID = "22222222-2222-2222-2222-222222222222"
JWT_SECRET = "test-secret"


# ── Fake Gemini SDK ───────────────────────────────────────────────

def make_response(text):
    """Shape of a google-genai GenerateContentResponse, as far as we read it."""
    if text is None:
        return SimpleNamespace(candidates=[])
    part = SimpleNamespace(text=text)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


@dataclass
class FakeCall:
    key: str
    model: str
    contents: List[Any]
    config: Any

    @property
    def texts(self) -> List[str]:
        return [c.parts[0].text for c in self.contents]

    @property
    def roles(self) -> List[str]:
        return [c.role for c in self.contents]


class FakeGemini:
    """
    Stands in for google.genai.Client.

    Queue replies in ``replies``: a string, None (no candidates) or an
    exception to raise. When the queue is empty ``default_reply`` is used.
    """

    def __init__(self):
        self.calls: List[FakeCall] = []
        self.replies: List[Any] = []
        self.default_reply = "Hello from the ACNS assistant!"
        self.created_for: List[str] = []
        self.delay = 0.0
        self.closed_for: List[str] = []

    def factory(self, key: str):
        self.created_for.append(key)
        fake = self

        class _Models:
            async def generate_content(self, model, contents, config):
                fake.calls.append(FakeCall(key, model, list(contents), config))
                if fake.delay:
                    await asyncio.sleep(fake.delay)
                reply = fake.replies.pop(0) if fake.replies else fake.default_reply
                if isinstance(reply, Exception):
                    raise reply
                return make_response(reply)

        async def aclose():
            fake.closed_for.append(key)

        return SimpleNamespace(aio=SimpleNamespace(models=_Models(), aclose=aclose))

    @property
    def last(self) -> FakeCall:
        return self.calls[-1]


class FakeClock:
    """Deterministic clock; every read advances time by ``step``."""

    def __init__(self, start=None, step=timedelta(milliseconds=1)):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)
        self.step = step

    def __call__(self) -> datetime:
        self.now += self.step
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ── Seed data ─────────────────────────────────────────────────────

async def seed_content(database: Database) -> dict:
    base = datetime(2024, 1, 1)
    ids = {}
    async with database.session() as session:
        session.add(WebsiteSettings(
            id="main",
            company_name="ACNS",
            company_full_name="Advanced Cloud & Network Solutions",
            tagline="Empowering Businesses with Cutting-Edge Technology",
            contact_email="contact@acns.tech",
            phone="+1 (555) 123-4567",
            address="123 Tech Innovation Drive, San Francisco, CA",
        ))

        # 12 active cloud services (more than any cap) plus one inactive
        for i in range(12):
            service = Service(
                name=f"Cloud Service {i:02d}",
                slug=f"cloud-service-{i:02d}",
                short_desc="Scalable cloud solutions",
                description="Managed cloud infrastructure",
                is_active=True,
                sort_order=12 - i,
            )
            session.add(service)
            if i == 0:
                ids["service"] = service
        session.add(Service(
            name="Retired Cloud Offering", slug="retired", short_desc="old",
            description="cloud", is_active=False, sort_order=0,
        ))
        session.add(Service(
            name="Cybersecurity", slug="cybersecurity", short_desc="SOC and pen testing",
            description="Security operations", is_active=True, sort_order=50,
        ))

        for i in range(7):
            blog = Blog(
                title=f"Post {i}",
                slug=f"post-{i}",
                excerpt="Thoughts on networking",
                content="SD-WAN and network design" if i % 2 else "Cloud cost optimization",
                category="Network",
                is_published=True,
                created_at=base + timedelta(days=i),
            )
            session.add(blog)
            ids.setdefault("blog", blog)
        session.add(Blog(
            title="Draft cloud post", slug="draft", content="cloud", is_published=False,
            created_at=base + timedelta(days=30),
        ))

        for i in range(3):
            session.add(JobOpening(
                title=f"Cloud Engineer {i}", slug=f"cloud-engineer-{i}",
                department="Engineering", location="Remote", employment_type="FULL_TIME",
                description="Build cloud platforms", is_active=True,
            ))
        session.add(JobOpening(
            title="Closed Role", slug="closed", department="Sales",
            location="Berlin", is_active=False,
        ))

        product = Product(
            name="ACNS Shield", slug="acns-shield", short_desc="Firewall as a service",
            description="Cloud-native firewall with 100% uptime", category="Security",
            is_active=True, sort_order=1,
        )
        session.add(product)
        ids["product"] = product

        session.add(AdminUser(id=ADMIN_ID, email="admin@acns.tech", first_name="Ada", is_active=True))
        session.add(AdminUser(id=INACTIVE_ADMIN_ID, email="old@acns.tech", is_active=False))

    return {name: row.id for name, row in ids.items()}


# ── Fixtures ──────────────────────────────────────────────────────

@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'acns.db'}"


@pytest.fixture
async def database(db_url):
    db = Database(db_url)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def repository(database):
    return ContentRepository(database)


@pytest.fixture
async def seeded(database):
    return await seed_content(database)


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_service(repository, fake_gemini, clock):
    """Build an AIService with its own key pool and session store."""

    def _make(keys=("key-1",), repo=None, timeout=5.0):
        llm = GeminiClient(
            KeyPool(keys),
            model_name="gemini-test",
            timeout_seconds=timeout,
            client_factory=fake_gemini.factory,
        )
        store = SessionStore(ttl_minutes=30, sweep_interval_minutes=10, clock=clock)
        return AIService(repo or repository, llm, store, frontend_url="https://acns.example")

    return _make


@pytest.fixture
def ai_service(make_service):
    return make_service()


def make_settings(database_url: str, keys=("key-1",), rate_limit: int = 100) -> Settings:
    return Settings(
        app_name="ACNS-AI-Test",
        app_env="test",
        log_level="WARNING",
        log_dir=_TMP / "logs",
        database_url=database_url,
        gemini_keys=tuple(keys),
        gemini_model="gemini-test",
        gemini_timeout_seconds=5.0,
        frontend_url="https://acns.example",
        jwt_secret=JWT_SECRET,
        jwt_algorithm="HS256",
        ai_rate_limit_per_minute=rate_limit,
        enable_audit_logging=True,
        cors_origins=("https://acns.example",),
        session_ttl_minutes=30,
        session_sweep_minutes=10,
        auto_create_tables=False,
    )


@pytest.fixture
def api_db_url(tmp_path):
    """A seeded database file, prepared on its own event loop."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"

    async def _prepare():
        db = Database(url)
        await db.create_tables()
        ids = await seed_content(db)
        await db.close()
        return ids

    ids = asyncio.run(_prepare())
    return url, ids
