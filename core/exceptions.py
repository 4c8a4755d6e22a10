# core/exceptions.py
"""
Error taxonomy shared by every marketplace component.

Every `MarketplaceError` carries a human readable `user_message` that is safe
to show to a person, separate from the raw store error kept in `detail`.
`InvariantViolation` is outside that hierarchy: it signals a
programming error and is never recovered at a component boundary.
"""


class MarketplaceError(Exception):
    """Base class for recoverable marketplace errors."""

    default_message = "Something went wrong. Please try again."
    status_code = 400

    def __init__(self, user_message=None, *, detail=None):
        self.user_message = user_message or self.default_message
        self.detail = detail
        super().__init__(self.user_message)


class ValidationError(MarketplaceError):
    """Input rejected before any store call. Never retried."""

    default_message = "Please correct the highlighted fields."

    def __init__(self, user_message=None, *, errors=None, detail=None):
        self.errors = dict(errors or {})
        if user_message is None and len(self.errors) == 1:
            user_message = next(iter(self.errors.values()))
        super().__init__(user_message, detail=detail)


class QueryConfigurationError(ValidationError):
    default_message = "Invalid pagination: offset requires a limit."


class SessionClosed(ValidationError):
    default_message = "Your session has ended. Please log in again."


class NotFoundError(MarketplaceError):
    default_message = "The requested item could not be found."
    status_code = 404


class ConflictError(MarketplaceError):
    default_message = "This item already exists."
    status_code = 409


class TransientStoreError(MarketplaceError):
    default_message = "The service is temporarily unavailable. Please try again."
    status_code = 503


class InvariantViolation(AssertionError):
    """A domain object was built with data that breaks its invariants."""


class AuthenticationRequired(MarketplaceError):
    default_message = "Please log in to continue."
    status_code = 401
