"""
Root test configuration for all tests.

Keeps settings deterministic: APP_ENV defaults to development and the cached
settings instance is reset around every test.
"""

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest

from common.config.settings import get_settings


@pytest.fixture(autouse=True)
def app_env() -> Generator[None, None, None]:
    """
    Provide a development APP_ENV unless the environment already sets one.

    Clears the lru_cache of get_settings before and after the test so settings
    built under patched environment variables never leak between tests.
    """
    env = {} if os.getenv("APP_ENV") else {"APP_ENV": "development"}
    get_settings.cache_clear()
    with patch.dict(os.environ, env):
        yield
    get_settings.cache_clear()
