"""Configuration package for the entity resolution engine."""

from .settings import Environment, Settings, get_environment, get_settings

__all__ = ["Environment", "Settings", "get_environment", "get_settings"]
