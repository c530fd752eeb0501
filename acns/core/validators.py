"""
Input Validators - Checks shared by the HTTP schemas and the AI service.

The request schemas reject malformed bodies before a route runs, but the
AI service is also called directly (scripts, tests), so it repeats the
checks that protect the model call.
"""
import re
from typing import Optional, Tuple

MAX_MESSAGE_LENGTH = 2000
MIN_SEARCH_LENGTH = 2
MAX_SESSION_ID_LENGTH = 128

SUMMARY_TYPES = ("blog", "service", "product")

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.:-]+$")


def sanitize_message(message: str) -> str:
    """
    Sanitize a user message.

    - Removes null bytes
    - Strips leading/trailing whitespace
    """
    if not message:
        return ""
    return message.replace("\x00", "").strip()


def validate_message(message: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """
    Full validation and sanitization of a chat message.

    Returns:
        Tuple of (is_valid, sanitized_message, error_message)
    """
    if message is None or not message.strip():
        return False, "", "Message is required"

    sanitized = sanitize_message(message)

    if not sanitized:
        return False, "", "Message cannot be empty after sanitization"

    if len(sanitized) > MAX_MESSAGE_LENGTH:
        return False, "", f"Message too long (max {MAX_MESSAGE_LENGTH} chars)"

    return True, sanitized, None


def validate_session_id(session_id: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a client-supplied session ID.

    Session IDs are opaque, but they are logged and used as dict keys,
    so only short printable tokens are accepted.
    """
    if not session_id:
        return True, None  # Empty is OK (will be generated)

    if len(session_id) > MAX_SESSION_ID_LENGTH:
        return False, f"Invalid session_id (max {MAX_SESSION_ID_LENGTH} chars)"

    if not _SESSION_ID_PATTERN.match(session_id):
        return False, "Invalid session_id format"

    return True, None


def validate_search_query(query: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """
    Validate a smart-search query.

    Returns:
        Tuple of (is_valid, trimmed_query, error_message)
    """
    term = (query or "").strip()
    if len(term) < MIN_SEARCH_LENGTH:
        return False, term, f"Search query must be at least {MIN_SEARCH_LENGTH} characters"
    return True, term, None


def validate_summary_type(content_type: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Check that a summarize request targets a supported content type."""
    if content_type not in SUMMARY_TYPES:
        return False, f"Invalid content type. Use: {', '.join(SUMMARY_TYPES)}"
    return True, None
