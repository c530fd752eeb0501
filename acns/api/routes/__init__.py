"""
API Routes module - Endpoint definitions.

- ai.py     : Chatbot, search, quick actions, summaries and drafts
- health.py : Health check endpoints
"""
from acns.api.routes.ai import router as ai_router
from acns.api.routes.health import router as health_router

__all__ = [
    "ai_router",
    "health_router",
]
