"""Typed failures surfaced to HTTP callers.

Every error carries a stable ``code``, the HTTP status it maps to, and a
message that is safe to show to clients. Diagnostic detail that must not
leak goes into ``reason``, which is only ever logged.
"""

from __future__ import annotations


class StorefrontError(Exception):
    code = "Error"
    status_code = 500
    default_message = "Something went wrong"
    retryable = False

    def __init__(self, message: str | None = None, *, reason: str | None = None):
        self.message = message or self.default_message
        self.reason = reason
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.retryable:
            body["retryable"] = True
        return body


class Unauthenticated(StorefrontError):
    code = "Unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class Forbidden(StorefrontError):
    code = "Forbidden"
    status_code = 403
    default_message = "Access denied"


class AdminRequired(Forbidden):
    default_message = "Admin access required"


class NotFound(StorefrontError):
    code = "NotFound"
    status_code = 404
    default_message = "Not found"


class InvalidInput(StorefrontError):
    code = "InvalidInput"
    status_code = 400
    default_message = "Invalid input"


class InvalidStatus(InvalidInput):
    code = "InvalidStatus"
    default_message = "Invalid status"


class InvalidTransition(InvalidInput):
    code = "InvalidTransition"
    default_message = "Order can no longer change status"


class EmptyCart(StorefrontError):
    code = "EmptyCart"
    status_code = 400
    default_message = "Cart is empty"


class NoValidItems(StorefrontError):
    code = "NoValidItems"
    status_code = 400
    default_message = "No valid products in cart"


class CannotCancelCompleted(StorefrontError):
    code = "CannotCancelCompleted"
    status_code = 400
    default_message = "Cannot cancel completed orders"


class Unavailable(StorefrontError):
    """A dependency (database, identity provider, lock) did not answer in time."""

    code = "Unavailable"
    status_code = 503
    default_message = "Service temporarily unavailable"
    retryable = True
    retry_after_seconds = 1
