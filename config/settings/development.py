"""
Django Settings - Development Configuration
"""

from .base import *  # noqa: F401,F403

DEBUG = True

# Set LOG_SQL=True to echo every query
if config("LOG_SQL", default=False, cast=bool):
    LOGGING["loggers"]["django.db.backends"] = {
        "handlers": ["console"],
        "level": "DEBUG",
        "propagate": False,
    }

# Email - Console backend
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
