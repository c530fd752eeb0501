"""Tests for AIService orchestration with a fake Gemini client."""

import pytest

from acns.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from acns.database import ContentRepository
from acns.llm.prompts import ADMIN_CLAUSE
from acns.memory.manager import ANONYMOUS_PREFIX
from acns.services.ai_service import CHAT_FALLBACK_REPLY, SUMMARY_FALLBACK

pytestmark = pytest.mark.asyncio


class BrokenBlogRepository(ContentRepository):
    async def list_recent_blogs(self, limit: int = 5):
        raise RuntimeError("blogs table unavailable")


class UntouchableRepository:
    """Fails the test if any data-layer call is made."""

    def __getattr__(self, name):
        raise AssertionError(f"repository.{name} should not be called")


# ── Chat ──────────────────────────────────────────────────────────

async def test_chat_single_key_records_turn(make_service, fake_gemini, seeded):
    service = make_service(keys=("only-key",))
    fake_gemini.replies = ["Hello! How can ACNS help?"]

    response = await service.chat("Hi", "visitor-1")

    assert response.reply == "Hello! How can ACNS help?"
    assert response.session_id == "visitor-1"
    session = service.session_store.get("visitor-1")
    assert [(t.user, t.assistant) for t in session.history] == [("Hi", "Hello! How can ACNS help?")]
    assert fake_gemini.last.key == "only-key"


async def test_chat_uses_chat_sampling_and_live_context(ai_service, fake_gemini, seeded):
    await ai_service.chat("What do you offer?", "visitor-1")

    config = fake_gemini.last.config
    assert config.temperature == 0.7
    assert config.top_p == 0.9
    assert config.top_k == 40
    assert config.max_output_tokens == 2048
    system = str(config.system_instruction)
    assert "ACNS AI Assistant" in system
    assert "Cloud Service 11" in system
    assert "Advanced Cloud & Network Solutions" in system
    assert ADMIN_CLAUSE not in system


async def test_chat_admin_gets_admin_clause(ai_service, fake_gemini, seeded):
    await ai_service.chat("Help me with the dashboard", "admin-1", is_admin=True)
    assert ADMIN_CLAUSE in str(fake_gemini.last.config.system_instruction)


async def test_chat_without_session_id_gets_anonymous_one(ai_service, seeded):
    response = await ai_service.chat("Hi")

    assert response.session_id.startswith(ANONYMOUS_PREFIX)
    assert response.session_id in ai_service.session_store


async def test_chat_history_alternates_roles(ai_service, fake_gemini, seeded):
    fake_gemini.replies = ["first reply", "second reply"]

    await ai_service.chat("first", "s1")
    await ai_service.chat("second", "s1")

    call = fake_gemini.last
    assert call.roles == ["user", "model", "user"]
    assert call.texts == ["first", "first reply", "second"]


async def test_chat_forwards_only_last_twenty_turns(ai_service, fake_gemini, seeded):
    session = ai_service.session_store.get_or_create("long")
    for i in range(1, 26):
        session.add_turn(f"user {i}", f"reply {i}")

    await ai_service.chat("turn 26", "long")

    contents = fake_gemini.last.texts
    assert len(contents) == 41
    assert contents[0] == "user 6"
    assert contents[1] == "reply 6"
    assert contents[-2] == "reply 25"
    assert contents[-1] == "turn 26"
    # the stored history itself is not truncated
    assert session.turn_count == 26


async def test_chat_empty_reply_uses_apology(ai_service, fake_gemini, seeded):
    fake_gemini.replies = [None]

    response = await ai_service.chat("Hi", "s1")

    assert response.reply == CHAT_FALLBACK_REPLY
    assert ai_service.session_store.get("s1").history[-1].assistant == CHAT_FALLBACK_REPLY


async def test_chat_upstream_failure_propagates(ai_service, fake_gemini, seeded):
    fake_gemini.replies = [RuntimeError("gemini down")]

    with pytest.raises(UpstreamError):
        await ai_service.chat("Hi", "s1")

    assert ai_service.session_store.get("s1").turn_count == 0


async def test_chat_without_keys_is_configuration_error(make_service, fake_gemini):
    service = make_service(keys=())

    with pytest.raises(ConfigurationError):
        await service.chat("Hi", "s1")

    assert fake_gemini.calls == []
    assert "s1" not in service.session_store


@pytest.mark.parametrize("message", ["", "   ", "x" * 2001])
async def test_chat_rejects_invalid_messages(ai_service, fake_gemini, message):
    with pytest.raises(ValidationError):
        await ai_service.chat(message, "s1")
    assert fake_gemini.calls == []


async def test_chat_trims_message(ai_service, fake_gemini, seeded):
    await ai_service.chat("  Hi there  ", "s1")
    assert fake_gemini.last.texts[-1] == "Hi there"


async def test_chat_degrades_when_live_context_fails(make_service, database, fake_gemini, seeded):
    service = make_service(repo=BrokenBlogRepository(database))

    response = await service.chat("Hi", "s1")

    assert response.reply == fake_gemini.default_reply
    system = str(fake_gemini.last.config.system_instruction)
    assert "No live site data is available right now." in system


# ── Search ────────────────────────────────────────────────────────

async def test_search_counts_and_tags_results(ai_service, fake_gemini, seeded):
    fake_gemini.replies = ["Try our cloud services page."]

    response = await ai_service.search("cloud")

    results = response.results
    assert len(results.services) == 5
    assert len(results.blogs) == 4
    assert len(results.products) == 1
    assert len(results.jobs) == 3
    assert response.total_results == 13
    assert all(item["type"] == "service" for item in results.services)
    assert all(item["type"] == "job" for item in results.jobs)
    assert response.ai_summary == "Try our cloud services page."

    config = fake_gemini.last.config
    assert config.temperature == 0.5
    assert config.max_output_tokens == 256


async def test_search_minimum_length(ai_service, seeded):
    assert (await ai_service.search("  ab  ")).query == "ab"

    with pytest.raises(ValidationError):
        await ai_service.search("a")
    with pytest.raises(ValidationError):
        await ai_service.search("   ")


async def test_search_summary_failure_is_none(ai_service, fake_gemini, seeded):
    fake_gemini.replies = [RuntimeError("quota")]

    response = await ai_service.search("cloud")

    assert response.total_results == 13
    assert response.ai_summary is None


async def test_search_without_results_skips_summary(ai_service, fake_gemini, seeded):
    response = await ai_service.search("quantum entanglement")

    assert response.total_results == 0
    assert response.ai_summary is None
    assert fake_gemini.calls == []


async def test_search_works_without_keys(make_service, fake_gemini, seeded):
    service = make_service(keys=())

    response = await service.search("cloud")

    assert response.total_results == 13
    assert response.ai_summary is None
    assert fake_gemini.calls == []


# ── Generate ──────────────────────────────────────────────────────

async def test_generate_parses_fenced_json(ai_service, fake_gemini):
    fake_gemini.replies = ['```json\n{"subject": "Hello", "body": "Welcome"}\n```']

    response = await ai_service.generate("email", "Welcome a new client", "friendly")

    assert response.format == "structured"
    assert response.generated == {"subject": "Hello", "body": "Welcome"}
    assert response.type == "email"
    assert "Welcome a new client" in fake_gemini.last.texts[0]
    assert "Tone: friendly" in fake_gemini.last.texts[0]
    assert fake_gemini.last.config.temperature == 0.8
    assert fake_gemini.last.config.max_output_tokens == 4096


async def test_generate_non_json_is_raw(ai_service, fake_gemini):
    fake_gemini.replies = ["Sorry, here is prose instead."]

    response = await ai_service.generate("blog", "Cloud security trends")

    assert response.format == "raw"
    assert response.generated == {"raw": "Sorry, here is prose instead."}


async def test_generate_empty_reply_is_empty_object(ai_service, fake_gemini):
    fake_gemini.replies = [None]

    response = await ai_service.generate("seo", "Services page")

    assert response.format == "structured"
    assert response.generated == {}


async def test_generate_without_keys(make_service):
    with pytest.raises(ConfigurationError):
        await make_service(keys=()).generate("blog", "Cloud security trends")


# ── Summarize ─────────────────────────────────────────────────────

async def test_summarize_blog(ai_service, fake_gemini, seeded):
    fake_gemini.replies = ["- point one\n- point two"]

    response = await ai_service.summarize("blog", seeded["blog"])

    assert response.title == "Post 0"
    assert response.summary == "- point one\n- point two"
    assert "Title: Post 0" in fake_gemini.last.texts[0]
    assert fake_gemini.last.config.temperature == 0.3
    assert fake_gemini.last.config.max_output_tokens == 512


async def test_summarize_service_and_product(ai_service, seeded):
    assert (await ai_service.summarize("service", seeded["service"])).title == "Cloud Service 00"
    assert (await ai_service.summarize("product", seeded["product"])).title == "ACNS Shield"


async def test_summarize_empty_reply_uses_fallback(ai_service, fake_gemini, seeded):
    fake_gemini.replies = [None]
    response = await ai_service.summarize("product", seeded["product"])
    assert response.summary == SUMMARY_FALLBACK


@pytest.mark.parametrize(
    "content_type, message",
    [
        ("blog", "Blog post not found"),
        ("service", "Service not found"),
        ("product", "Product not found"),
    ],
)
async def test_summarize_missing_item(ai_service, fake_gemini, seeded, content_type, message):
    with pytest.raises(NotFoundError) as exc_info:
        await ai_service.summarize(content_type, "does-not-exist")

    assert exc_info.value.message == message
    assert fake_gemini.calls == []


async def test_summarize_invalid_type_checks_before_data_access(make_service, fake_gemini):
    service = make_service(repo=UntouchableRepository())

    with pytest.raises(ValidationError):
        await service.summarize("job", "anything")

    assert fake_gemini.calls == []


async def test_summarize_without_keys(make_service, seeded):
    with pytest.raises(ConfigurationError):
        await make_service(keys=()).summarize("blog", seeded["blog"])


# ── Quick actions ─────────────────────────────────────────────────

async def test_quick_actions_home(ai_service, seeded):
    response = await ai_service.quick_actions("home")

    assert response.page == "home"
    assert len(response.actions) == 4
    assert response.actions[0]["action"] == "chat"
    assert {"label": "Contact the team", "action": "navigate", "url": "/contact"} in response.actions


async def test_quick_actions_any_matches_home(ai_service, seeded):
    home = await ai_service.quick_actions("home")
    any_page = await ai_service.quick_actions("any")
    assert any_page.actions == home.actions


async def test_quick_actions_blog_links_latest_post(ai_service, seeded):
    actions = (await ai_service.quick_actions("blog")).actions

    assert actions[0] == {"label": "Read: Post 6", "action": "navigate", "url": "/blog/post-6"}
    assert actions[1]["action"] == "chat"


async def test_quick_actions_blog_without_posts(ai_service):
    actions = (await ai_service.quick_actions("blog")).actions
    assert len(actions) == 1
    assert actions[0]["action"] == "chat"


async def test_quick_actions_careers_counts_jobs(ai_service, seeded):
    actions = (await ai_service.quick_actions("careers")).actions
    assert actions[0] == {"label": "Browse 3 open positions", "action": "navigate", "url": "/careers"}


async def test_quick_actions_admin_extras(ai_service, seeded):
    assert len((await ai_service.quick_actions("services")).actions) == 2
    assert len((await ai_service.quick_actions("services", is_admin=True)).actions) == 5
    assert len((await ai_service.quick_actions("home", is_admin=True)).actions) == 7


async def test_quick_actions_unknown_page(ai_service, seeded):
    assert (await ai_service.quick_actions("pricing")).actions == []
    assert len((await ai_service.quick_actions("pricing", is_admin=True)).actions) == 3


async def test_quick_actions_are_copies(ai_service, seeded):
    first = await ai_service.quick_actions("home")
    first.actions[0]["label"] = "changed"

    second = await ai_service.quick_actions("home")
    assert second.actions[0]["label"] == "Tell me about ACNS services"
