"""
Test settings for energy_ledger project.

In-memory SQLite, fast password hashing and quiet logs.
"""

from .base import *  # noqa: F403, F401

SECRET_KEY = "test-secret-key"

DEBUG = False

ALLOWED_HOSTS = ["testserver"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["ledger"]["level"] = "WARNING"  # noqa: F405
