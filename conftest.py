# conftest.py
"""
Pytest configuration shared by every app's test suite.
"""
import shutil

import pytest
from django.conf import settings

from core.store import get_store


@pytest.fixture(autouse=True)
def fresh_store():
    """Every test starts with a new process store."""
    get_store.cache_clear()
    yield
    get_store.cache_clear()


@pytest.fixture(scope='session', autouse=True)
def clean_media():
    yield
    shutil.rmtree(settings.MEDIA_ROOT, ignore_errors=True)
