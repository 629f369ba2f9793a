from .base import *

# Use a fixed secret key for CI
SECRET_KEY = "django-insecure-testkey"
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": True,
    }
}

# Fast hashing for tests
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Disable debug
DEBUG = False

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

PAYROLL_OFFICIAL_MONTHLY_CAP = "28075"
PAYROLL_OFFICIAL_BASE_DAYS = 30
