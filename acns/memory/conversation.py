"""
Conversation Memory - Data structures for chat history.

This module provides:
- Turn: one user message and the assistant reply it produced
- ConversationSession: the history and access time of one session

History is stored in full for the life of the session; callers decide
how many recent turns to forward to the model.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class Turn:
    """
    A completed exchange in a conversation.

    Attributes:
        user: The user's message
        assistant: The reply returned to the user
    """
    user: str
    assistant: str


@dataclass
class ConversationSession:
    """
    Chat history for a single session.

    Attributes:
        session_id: Opaque session identifier
        created_at: When the session was created
        last_access: Refreshed on every lookup through the store
        history: Completed turns, oldest first
    """
    session_id: str
    created_at: datetime
    last_access: datetime
    history: List[Turn] = field(default_factory=list)

    def add_turn(self, user: str, assistant: str) -> Turn:
        turn = Turn(user=user, assistant=assistant)
        self.history.append(turn)
        return turn

    def recent_turns(self, n: int) -> List[Turn]:
        """The last ``n`` turns, oldest first."""
        if n <= 0:
            return []
        return self.history[-n:]

    @property
    def turn_count(self) -> int:
        return len(self.history)
