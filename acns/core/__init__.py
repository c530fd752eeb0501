"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Error hierarchy mapped to HTTP status codes
- rate_limiter.py   : Per-client sliding window limiter for AI routes
- validators.py     : Input checks shared by routes and services
- audit.py          : Request audit and security header middleware
"""
from acns.core.config import get_settings, Settings
from acns.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
