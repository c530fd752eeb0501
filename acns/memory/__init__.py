"""
Memory Package - Conversation history management.

Sessions live in process memory only; they are lost on restart and
swept after a period of inactivity.

Example:
    >>> from acns.memory import SessionStore
    >>> store = SessionStore()
    >>> session = store.get_or_create("user-123")
    >>> session.add_turn("Hello!", "Hi there!")
"""
from acns.memory.conversation import ConversationSession, Turn
from acns.memory.manager import SessionStore, new_anonymous_session_id

__all__ = [
    "Turn",
    "ConversationSession",
    "SessionStore",
    "new_anonymous_session_id",
]
