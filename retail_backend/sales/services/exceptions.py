# sales/services/exceptions.py

"""
SALES SERVICE ERRORS

Centralized domain errors for the sale transaction. Each class carries the
HTTP mapping used by common.exception_handler:

- ValidationError          400  malformed / missing input, unknown products
- NotFoundError            404  referenced customer does not exist
- InsufficientStockError   409  requested quantity exceeds current stock
- DuplicateError           409  uniqueness / integrity conflict (e.g. email race)
- TransientError           503  datastore unreachable; safe to retry the request
"""

from common.exceptions import ServiceError


class SaleServiceError(ServiceError):
    """Base exception for all sale service failures."""


class ValidationError(SaleServiceError):
    status_code = 400
    code = "validation_error"


class NotFoundError(ValidationError):
    status_code = 404
    code = "not_found"


class InsufficientStockError(SaleServiceError):
    status_code = 409
    code = "insufficient_stock"

    def __init__(self, *, product_id, available: int, requested: int, product_name: str = ""):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        self.product_name = product_name

        label = f"{product_name} ({product_id})" if product_name else str(product_id)
        super().__init__(
            f"Insufficient stock for product {label}: available {available}, requested {requested}",
            details={
                "product_id": str(product_id),
                "available": available,
                "requested": requested,
            },
        )


class DuplicateError(SaleServiceError):
    status_code = 409
    code = "duplicate"


class TransientError(SaleServiceError):
    status_code = 503
    code = "transient"
    retryable = True
