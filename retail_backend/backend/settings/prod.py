# backend/settings/prod.py
"""
PRODUCTION SETTINGS

Fails at import when SECRET_KEY, ALLOWED_HOSTS, a PostgreSQL DATABASE_URL
or https CORS/CSRF origins are missing.

Database isolation:
- Checkout relies on row locks (SELECT ... FOR UPDATE) plus a conditional
  stock decrement. PostgreSQL at READ COMMITTED is sufficient.
- Behind a transaction-mode pooler (PgBouncer) a request keeps one server
  connection for its whole atomic block; statement-mode pooling breaks this.
"""

from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import BASE_DIR, MIDDLEWARE, env

DEBUG = False


def _require(name, value):
    if not value:
        raise ImproperlyConfigured(f"{name} must be set in production.")
    return value


SECRET_KEY = _require("SECRET_KEY", (env("SECRET_KEY", default="") or "").strip())
if SECRET_KEY == "dev-insecure-change-me":
    raise ImproperlyConfigured("SECRET_KEY is still the development key.")

ALLOWED_HOSTS = _require("ALLOWED_HOSTS", env.list("ALLOWED_HOSTS", default=[]))

# ----------------------------
# Database: PostgreSQL only
# ----------------------------
if not _require("DATABASE_URL", env("DATABASE_URL", default="")).startswith("postgres"):
    raise ImproperlyConfigured("DATABASE_URL must point at PostgreSQL in production.")

DATABASES = {"default": env.db("DATABASE_URL")}
DATABASES["default"].update(
    CONN_MAX_AGE=env.int("DB_CONN_MAX_AGE", default=60),
    CONN_HEALTH_CHECKS=True,
    # checkout opens its own transaction
    ATOMIC_REQUESTS=False,
)

# ----------------------------
# Static files (WhiteNoise)
# ----------------------------
STATIC_ROOT = env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles"))
MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# TLS terminates at the load balancer
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# ----------------------------
# CORS / CSRF: storefront origins, https only
# ----------------------------
CORS_ALLOWED_ORIGINS = _require("CORS_ALLOWED_ORIGINS", env.list("CORS_ALLOWED_ORIGINS", default=[]))
CSRF_TRUSTED_ORIGINS = _require("CSRF_TRUSTED_ORIGINS", env.list("CSRF_TRUSTED_ORIGINS", default=[]))

for _origin in CORS_ALLOWED_ORIGINS + CSRF_TRUSTED_ORIGINS:
    if not _origin.startswith("https://"):
        raise ImproperlyConfigured(f"Origin {_origin!r} must be https:// in production.")

# JWT travels in the Authorization header
CORS_ALLOW_CREDENTIALS = False
