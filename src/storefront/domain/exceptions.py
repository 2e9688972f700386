"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthenticationError(DomainException):
    """The caller could not be identified (missing or invalid token)."""


class AuthorizationError(DomainException):
    """The caller is known but lacks the required role."""


class UpstreamError(DomainException):
    """The backend service or a third-party API failed.

    ``payload`` keeps whatever the upstream returned so callers can log it.
    """

    def __init__(self, message: str, payload: dict | None = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


# --- Coupon failures ---------------------------------------------------------


class CouponExpiredError(ValidationError):
    pass


class CouponNotYetActiveError(ValidationError):
    pass


class CouponUsageLimitError(ValidationError):
    pass


class MinimumOrderNotMetError(ValidationError):
    pass


# --- Order tracking ----------------------------------------------------------


class PhoneMismatchError(ValidationError):
    """The phone number given does not belong to the tracked order."""
