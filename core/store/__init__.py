from functools import lru_cache

from django.utils.module_loading import import_string

from core.conf import marketplace_setting

from .base import MarketplaceStore


@lru_cache(maxsize=None)
def get_store():
    """Process-wide store instance configured by MARKETPLACE['STORE_BACKEND']."""
    return import_string(marketplace_setting('STORE_BACKEND'))()


__all__ = ['MarketplaceStore', 'get_store']
