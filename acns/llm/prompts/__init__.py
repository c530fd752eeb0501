"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from acns.llm.prompts.assistant_prompts import ADMIN_CLAUSE, build_system_prompt
from acns.llm.prompts.content_prompts import (
    GENERATION_SYSTEM_PROMPT,
    SEARCH_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    get_generation_prompt,
    get_search_summary_prompt,
    get_summary_prompt,
)

__all__ = [
    "ADMIN_CLAUSE",
    "build_system_prompt",
    "GENERATION_SYSTEM_PROMPT",
    "SEARCH_SYSTEM_PROMPT",
    "SUMMARY_SYSTEM_PROMPT",
    "get_generation_prompt",
    "get_search_summary_prompt",
    "get_summary_prompt",
]
