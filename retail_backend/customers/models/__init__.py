from .customer import Customer, normalize_customer_email

__all__ = ["Customer", "normalize_customer_email"]
