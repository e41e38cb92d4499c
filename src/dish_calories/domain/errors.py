"""Domain errors raised by calorie lookups and authentication."""

from enum import StrEnum


class CalorieLookupError(Exception):
    """Base error for calorie lookups."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SourceErrorKind(StrEnum):
    """Classification of nutrition source failures."""

    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    TRANSIENT = "transient"


class NutritionSourceError(CalorieLookupError):
    """The external nutrition database could not answer the search."""

    def __init__(self, kind: SourceErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class DishNotFoundError(CalorieLookupError):
    """The nutrition source returned no candidates for the dish."""


class NoMatchError(CalorieLookupError):
    """Candidates exist but none could be selected."""


class CaloriesUnavailableError(CalorieLookupError):
    """The matched food has no usable energy value."""


class InvalidServingsError(CalorieLookupError, ValueError):
    """Servings must be a positive number."""


class AuthError(Exception):
    """Base error for registration and login."""


class EmailAlreadyRegisteredError(AuthError):
    """A user with this email already exists."""


class InvalidCredentialsError(AuthError):
    """Email or password is wrong."""


class InvalidTokenError(AuthError):
    """Access token is malformed, tampered with or expired."""
