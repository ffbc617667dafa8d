"""
Configuration module.

Handles environment variables, the Notion secret, and application settings.
"""

from notion_blog.config.config import (
    APP_ENV,
    DEBUG,
    NOTION_SECRET,
    NOTION_VERSION,
    NOTION_API_BASE,
    NOTION_PAGE_SIZE,
    REQUEST_TIMEOUT,
    FETCH_WORKERS,
    DEFAULT_AUTHOR,
    LOG_DIR,
    EXPORT_DIR,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "NOTION_SECRET",
    "NOTION_VERSION",
    "NOTION_API_BASE",
    "NOTION_PAGE_SIZE",
    "REQUEST_TIMEOUT",
    "FETCH_WORKERS",
    "DEFAULT_AUTHOR",
    "LOG_DIR",
    "EXPORT_DIR",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
