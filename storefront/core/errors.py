# storefront/core/errors.py
"""
Error taxonomy shared by services and the request layer.

Each error maps to exactly one HTTP status. The mapping is part of the
public API: clients rely on the same condition always producing the
same status and `code`.

    NotFoundError         404  not_found
    InvalidArgumentError  400  invalid_argument
    EmptyCartError        400  empty_cart
    UnauthorizedError     401  unauthorized
    ConflictError         409  conflict
    PersistenceError      503  persistence

Anything else is an unanticipated fault and is rendered as a bare 500
by the handler in `storefront.main`.
"""

from fastapi import status


class StorefrontError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal"
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Not found"


class InvalidArgumentError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_argument"
    default_detail = "Invalid argument"


class EmptyCartError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "empty_cart"
    default_detail = "Cart is empty"


class UnauthorizedError(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_detail = "Authentication required"


class ConflictError(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_detail = "Conflicting update, please retry"


class PersistenceError(StorefrontError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "persistence"
    default_detail = "The store could not complete the request"


class CartChangedError(Exception):
    """
    Raised inside a checkout attempt when the cart no longer matches the
    snapshot the attempt was built from. Never leaves the checkout engine:
    it is retried, then surfaced as PersistenceError.
    """
