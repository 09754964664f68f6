#!/usr/bin/env python3
"""
Configuration management for the TalentScore web application.

The web app shares config.yaml (and its env overrides) with the CLI via
core.config_loader; this module only caches it for request handlers.
"""

from functools import lru_cache
from pathlib import Path

from core.config_loader import AppConfig, load_config


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from YAML file and applies environment variable overrides.
    Result is cached for the life of the process.

    Returns:
        AppConfig: The application configuration.
    """
    return load_config(str(get_project_root() / 'config.yaml'))
