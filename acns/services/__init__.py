"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No SQL (that belongs in database/)
- Orchestrate between LLM, database, and memory layers
"""
from acns.services.ai_service import AIService
from acns.services.context import LiveContextFetcher
from acns.services.generated import Generated, RawContent, StructuredContent, parse_generated
from acns.services.outcome import Outcome, attempt

__all__ = [
    "AIService",
    "LiveContextFetcher",
    "Generated",
    "RawContent",
    "StructuredContent",
    "parse_generated",
    "Outcome",
    "attempt",
]
