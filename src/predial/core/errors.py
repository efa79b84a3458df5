"""Exception hierarchy for the tax and valuation engines."""


class PredialError(Exception):
    """Base exception for all calculation errors."""


class NotFoundError(PredialError, LookupError):
    """Raised when a required rate-table row is not published."""


class InvalidArgumentError(PredialError, ValueError):
    """Raised when a caller supplies an out-of-domain value."""


class ConfigurationError(PredialError):
    """Raised when the rate tables themselves are inconsistent."""
