"""
PATH: users/auth_backends.py

AUTH BACKEND: email login

- Email lookup is case-insensitive (emails are stored lower-cased).
- The lookup is a plain read, so it is wrapped in the datastore retry policy;
  a connection blip during login is retried instead of surfacing as a 503.

Used by django.contrib.auth.authenticate() (API login and Django admin).
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

from common.db_retry import with_db_retry
from users.models.user import normalize_email_address


@with_db_retry()
def _find_user_by_email(email: str):
    User = get_user_model()
    return User.objects.filter(email=email).first()


class EmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        identifier = normalize_email_address(email or username)
        if not identifier or password is None:
            return None

        user = _find_user_by_email(identifier)
        if user is None:
            # same hashing cost as a real check (timing)
            get_user_model()().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
