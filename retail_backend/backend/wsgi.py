# backend/wsgi.py
"""
WSGI entrypoint (gunicorn backend.wsgi:application).

Falls back to dev settings; production sets
DJANGO_SETTINGS_MODULE=backend.settings.prod explicitly.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()
