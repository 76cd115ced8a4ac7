"""
Test settings.

Optimized for speed. Uses SQLite and a simple hasher.
"""

from src.config.django.base import *  # noqa: F401, F403

# ── Speed ───────────────────────────────────────────────────────────────

DEBUG = False
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# ── Database (SQLite for fast test runs) ────────────────────────────────

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": True,
    },
}
