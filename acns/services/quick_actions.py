"""
Quick Actions - Suggestion chips for the chatbot UI.

Each action either sends a prepared chat message or navigates to a page.
Most entries are static per page; the blog and careers pages add one
entry built from the database.
"""
from typing import Dict, List, Optional

from acns.database.repository import ContentRepository

Action = Dict[str, str]


def chat_action(label: str, message: str) -> Action:
    return {"label": label, "action": "chat", "message": message}


def navigate_action(label: str, url: str) -> Action:
    return {"label": label, "action": "navigate", "url": url}


HOME_ACTIONS: List[Action] = [
    chat_action("Tell me about ACNS services", "What services does ACNS offer?"),
    chat_action("I need cloud solutions", "Tell me about your cloud infrastructure services"),
    navigate_action("Contact the team", "/contact"),
    navigate_action("View open positions", "/careers"),
]

SERVICES_ACTIONS: List[Action] = [
    chat_action("Compare services", "Can you compare your cloud and cybersecurity services?"),
    navigate_action("Get a consultation", "/contact"),
]

BLOG_CHAT_ACTION = chat_action(
    "Suggest articles for me", "Recommend blog posts based on cloud computing"
)

CAREERS_CHAT_ACTION = chat_action(
    "Help me prepare my application",
    "Can you help me prepare for a job application at ACNS?",
)

ADMIN_ACTIONS: List[Action] = [
    chat_action("Generate a blog post", "Help me write a blog post about cloud security trends"),
    chat_action(
        "Write product description",
        "Help me create a compelling product description for a new cloud service",
    ),
    chat_action("Generate SEO metadata", "Generate SEO metadata for our services page"),
]


def latest_blog_action(latest: Optional[Dict[str, str]]) -> Optional[Action]:
    if not latest:
        return None
    return navigate_action(f"Read: {latest['title']}", f"/blog/{latest['slug']}")


def open_positions_action(job_count: int) -> Action:
    return navigate_action(f"Browse {job_count} open positions", "/careers")


async def build_quick_actions(
    repository: ContentRepository,
    page: str = "home",
    is_admin: bool = False,
) -> List[Action]:
    """
    Suggestions for ``page``; admin suggestions are appended for admins.

    Unknown pages get no page-specific entries.
    """
    actions: List[Action] = []

    if page in ("home", "any"):
        actions.extend(HOME_ACTIONS)
    elif page == "services":
        actions.extend(SERVICES_ACTIONS)
    elif page == "blog":
        latest = latest_blog_action(await repository.latest_blog())
        if latest:
            actions.append(latest)
        actions.append(BLOG_CHAT_ACTION)
    elif page == "careers":
        actions.append(open_positions_action(await repository.count_active_jobs()))
        actions.append(CAREERS_CHAT_ACTION)

    if is_admin:
        actions.extend(ADMIN_ACTIONS)

    # copies, so callers cannot mutate the shared tables
    return [dict(action) for action in actions]
