# users/services/accounts.py

"""
ACCOUNT SERVICE

- register_customer_user: self-registration from the storefront
- update_profile_name:    profile edit (name only)
- change_password:        requires the current password

Registration rules:
- New accounts always get role "customer".
- If a Customer with the same email already exists (e.g. created by an earlier
  anonymous checkout) and is not linked yet, it is linked to the new user.
  Otherwise a Customer is created for the user.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from customers.models import Customer
from permissions.roles import ROLE_CUSTOMER
from users.models import User
from users.models.user import normalize_email_address

from .exceptions import AccountExistsError, AccountValidationError, InvalidCredentialsError

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def _clean_name(name) -> str:
    name = (name or "").strip() if isinstance(name, str) else ""
    if len(name) < MIN_NAME_LENGTH:
        raise AccountValidationError(
            f"name is required and must be at least {MIN_NAME_LENGTH} characters"
        )
    return name


def _check_new_password(password) -> str:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise AccountValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return password


def register_customer_user(*, name, email, password) -> User:
    email = normalize_email_address(email)
    if not email or not password or not (name or "").strip():
        raise AccountValidationError("name, email and password are required")

    name = _clean_name(name)
    password = _check_new_password(password)

    try:
        with transaction.atomic():
            if User.objects.filter(email=email).exists():
                raise AccountExistsError("user already exists")

            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                role=ROLE_CUSTOMER,
            )

            customer = Customer.objects.select_for_update().filter(email=email).first()
            if customer is None:
                customer = Customer.objects.create(name=name, email=email, user=user)
                linked = "created"
            elif customer.user_id is None:
                customer.user = user
                customer.save(update_fields=["user", "updated_at"])
                linked = "linked"
            else:
                linked = "already_linked"
    except IntegrityError as exc:
        # concurrent registration with the same email
        raise AccountExistsError("user already exists") from exc

    logger.info(
        "users.registered",
        extra={"user_id": str(user.id), "customer_id": str(customer.id), "customer": linked},
    )
    return user


def update_profile_name(user: User, name) -> User:
    user.name = _clean_name(name)
    user.save(update_fields=["name", "updated_at"])
    return user


def change_password(user: User, *, current_password, new_password) -> None:
    if not current_password or not new_password:
        raise AccountValidationError("current password and new password are required")

    _check_new_password(new_password)

    if not user.check_password(current_password):
        raise InvalidCredentialsError("current password is incorrect")

    user.set_password(new_password)
    user.save(update_fields=["password", "updated_at"])
    logger.info("users.password_changed", extra={"user_id": str(user.id)})
