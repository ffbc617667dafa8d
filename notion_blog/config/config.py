"""
Configuration module for Notion Blog.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of notion_blog/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Notion Configuration
# =============================================================================

# Internal integration secret; the integration must be shared with the
# databases and pages that should appear on the blog
NOTION_SECRET: str = os.getenv("NOTION_SECRET", "")

# API version header sent with every request
NOTION_VERSION: str = os.getenv("NOTION_VERSION", "2022-06-28")

NOTION_API_BASE: str = os.getenv("NOTION_API_BASE", "https://api.notion.com/v1")

# Results per request. Only the first page is read, there is no cursor following.
NOTION_PAGE_SIZE: int = int(os.getenv("NOTION_PAGE_SIZE", "100"))


# =============================================================================
# Fetching Configuration
# =============================================================================

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

# Worker threads used to resolve sibling blocks concurrently
FETCH_WORKERS: int = int(os.getenv("FETCH_WORKERS", "8"))


# =============================================================================
# Content Defaults
# =============================================================================

# Author shown when a post has no Author/CreatedBy property
DEFAULT_AUTHOR: str = os.getenv("DEFAULT_AUTHOR", "Ozzy")


# =============================================================================
# Logging and Export
# =============================================================================

# Directory for daily log files; empty disables file logging
LOG_DIR: str = os.getenv("LOG_DIR", "")

# Static site output directory used by `main.py build`
EXPORT_DIR: str = os.getenv("EXPORT_DIR", "dist")


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production() and not NOTION_SECRET:
        errors.append("NOTION_SECRET is required in production")

    if NOTION_PAGE_SIZE < 1 or NOTION_PAGE_SIZE > 100:
        errors.append("NOTION_PAGE_SIZE must be between 1 and 100")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if FETCH_WORKERS < 1:
        errors.append("FETCH_WORKERS must be at least 1")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  NOTION_SECRET: {'***' if NOTION_SECRET else '(not set)'}")
    print(f"  NOTION_VERSION: {NOTION_VERSION}")
    print(f"  NOTION_PAGE_SIZE: {NOTION_PAGE_SIZE}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  FETCH_WORKERS: {FETCH_WORKERS}")
    print(f"  DEFAULT_AUTHOR: {DEFAULT_AUTHOR}")
    print(f"  LOG_DIR: {LOG_DIR or '(console only)'}")
    print(f"  EXPORT_DIR: {EXPORT_DIR}")
