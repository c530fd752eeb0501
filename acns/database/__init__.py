"""
Database module - Async SQLAlchemy access layer.

This module handles:
- Engine and session lifecycle (connection.py)
- ORM models for site content (models.py)
- Read-only content queries for the AI layer (repository.py)
"""
from acns.database.connection import Database
from acns.database.models import (
    AdminUser,
    Base,
    Blog,
    JobOpening,
    Product,
    Service,
    WebsiteSettings,
)
from acns.database.repository import ContentRepository

__all__ = [
    "Database",
    "ContentRepository",
    "Base",
    "WebsiteSettings",
    "Service",
    "Blog",
    "JobOpening",
    "Product",
    "AdminUser",
]
