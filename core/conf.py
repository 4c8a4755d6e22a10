# core/conf.py
from django.conf import settings

DEFAULTS = {
    "STORE_BACKEND": "core.store.orm.OrmStore",
    "MESSAGE_MAX_LENGTH": 2000,
    "MESSAGE_ECHO_TIMEOUT": 5.0,
    "RESUBSCRIBE_ATTEMPTS": 5,
    "RESUBSCRIBE_BASE_DELAY": 0.2,
    "BACKFILL_OVERLAP": 5.0,
    "AVATAR_MAX_SIZE": 5 * 1024 * 1024,
    "AVATAR_CONTENT_TYPES": ["image/jpeg", "image/jpg", "image/png", "image/webp"],
    "AVATAR_UPLOAD_DIR": "avatars",
    "SEARCH_PAGE_SIZE": 50,
}


def marketplace_setting(name):
    """Read a key from settings.MARKETPLACE, falling back to DEFAULTS."""
    overrides = getattr(settings, "MARKETPLACE", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
