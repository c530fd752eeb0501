"""
Content Prompts - Templates for generation, summaries and search.

Generation templates ask for a JSON object whose keys match the fields
of the matching admin form, so the dashboard can pre-fill a draft.
"""
import json
from typing import Any, Dict

COMPANY = "ACNS (Advanced Cloud & Network Solutions)"

GENERATION_SYSTEM_PROMPT = (
    "You are a professional content writer for ACNS, a technology company. "
    "Return ONLY valid JSON with no markdown code fences, no explanation, "
    "just the raw JSON object."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are a content summarizer for ACNS. "
    "Return a brief, clear summary in bullet points."
)

SEARCH_SYSTEM_PROMPT = (
    "You are a helpful search assistant for ACNS website. "
    "Be concise and helpful. Use the frontend URL for links."
)

GENERATION_TEMPLATES: Dict[str, str] = {
    "blog": (
        f"Write a well-structured blog post for a technology company called {COMPANY}. "
        "Use HTML formatting with <h2>, <h3>, <p>, <ul>, <li> tags for rich content.\n"
        "Title/Topic: {prompt}\n"
        "Tone: {tone}\n"
        "Include: Introduction, main body with 3-4 sections, conclusion, and a call-to-action.\n"
        'Return JSON: {{ "title": "...", "slug": "...", "excerpt": "...", '
        '"content": "...<html>...", "category": "...", "tags": ["...", "..."], '
        '"metaTitle": "...", "metaDescription": "..." }}'
    ),
    "product": (
        f"Write a compelling product description for {COMPANY}.\n"
        "Product: {prompt}\n"
        "Tone: {tone}\n"
        'Return JSON: {{ "name": "...", "slug": "...", "description": "...", '
        '"shortDesc": "...", "features": ["...", "..."], "category": "..." }}'
    ),
    "service": (
        f"Write a detailed service description for {COMPANY}.\n"
        "Service: {prompt}\n"
        "Tone: {tone}\n"
        'Return JSON: {{ "name": "...", "slug": "...", "description": "...", '
        '"shortDesc": "...", "features": ["...", "..."] }}'
    ),
    "seo": (
        "Generate SEO-optimized metadata for a page about: {prompt}\n"
        "Company: ACNS - Advanced Cloud & Network Solutions\n"
        'Return JSON: {{ "metaTitle": "... (max 60 chars)", '
        '"metaDescription": "... (max 160 chars)", "metaKeywords": ["...", "..."] }}'
    ),
    "email": (
        f"Write a professional email for {COMPANY}.\n"
        "Context: {prompt}\n"
        "Tone: {tone}\n"
        'Return JSON: {{ "subject": "...", "body": "..." }}'
    ),
    "social": (
        f"Write engaging social media posts for {COMPANY}.\n"
        "Topic: {prompt}\n"
        'Return JSON: {{ "twitter": "... (max 280 chars)", "linkedin": "...", "facebook": "..." }}'
    ),
}

GENERIC_TEMPLATE = "Generate content about: {prompt}\nTone: {tone}\nReturn as JSON."


def get_generation_prompt(content_type: str, prompt: str, tone: str) -> str:
    """Fill the template for ``content_type``, or the generic one if unknown."""
    template = GENERATION_TEMPLATES.get(content_type, GENERIC_TEMPLATE)
    return template.format(prompt=prompt, tone=tone)


def get_summary_prompt(title: str, content: str) -> str:
    return (
        "Summarize this content in 3-4 concise bullet points:\n"
        f"Title: {title}\n"
        f"Content: {content}"
    )


def get_search_summary_prompt(query: str, results: Dict[str, Any]) -> str:
    return (
        f'Summarize these search results for the query "{query}" in 2-3 helpful '
        "sentences, guiding the user to the most relevant result:\n"
        f"{json.dumps(results, ensure_ascii=False, default=str)}"
    )
