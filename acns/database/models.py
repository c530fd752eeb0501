"""
Database Models - SQLAlchemy ORM models for site content.

These tables are owned by the content management side of the backend;
the AI layer only reads them. Column names follow the snake_case form
of the original schema.
"""
import uuid
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class WebsiteSettings(Base):
    """Singleton row with company identity and contact details."""
    __tablename__ = "website_settings"

    id = Column(String(36), primary_key=True, default="main")
    company_name = Column(String(100), nullable=False, default="ACNS")
    company_full_name = Column(String(200), nullable=True)
    tagline = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_context(self) -> Dict[str, Any]:
        """Fields exposed to the assistant prompt."""
        return {
            "company_name": self.company_full_name,
            "tagline": self.tagline,
            "phone": self.phone,
            "email": self.contact_email,
            "address": self.address,
        }


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    short_desc = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_summary(self) -> Dict[str, Any]:
        return {"name": self.name, "slug": self.slug, "short_desc": self.short_desc}


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(300), nullable=False)
    slug = Column(String(300), nullable=False, unique=True)
    excerpt = Column(String(1000), nullable=True)
    content = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_summary(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "excerpt": self.excerpt,
            "category": self.category,
        }


class JobOpening(Base):
    __tablename__ = "job_openings"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    department = Column(String(100), nullable=True)
    location = Column(String(200), nullable=True)
    employment_type = Column("type", String(50), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_summary(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "department": self.department,
            "location": self.location,
            "type": self.employment_type,
        }


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    short_desc = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "short_desc": self.short_desc,
            "category": self.category,
        }


class AdminUser(Base):
    """Dashboard user; only looked up to verify bearer tokens."""
    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    role = Column(String(30), nullable=False, default="ADMIN")
    is_active = Column(Boolean, default=True, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
        }
