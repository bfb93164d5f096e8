"""
Django Settings - Testing Configuration
"""

from .base import *  # noqa: F401,F403

DEBUG = False
TESTING = True

SECRET_KEY = 'test-secret-key-not-for-production'

# Use faster password hasher
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Use sync Celery
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# Fast deterministic in-process cache for tests.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "hrms-tests-cache",
    }
}

# Disable logging during tests
LOGGING_CONFIG = None
LOGGING = {}

# Email - In-memory backend
EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

PAYROLL_WORKING_DAYS = 30
PAYROLL_DEDUCTIBLE_LEAVE_CODES = ['CL', 'SL']
