class ShortenerError(Exception):
    """Base exception for all errors answered with an HTTP error response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class BadRequestError(ShortenerError):
    """Raised when a required request parameter is missing or empty."""

    status_code = 400
    message = "Bad request"


class UnauthorizedError(ShortenerError):
    """Raised when the Authorization header does not match the admin key."""

    status_code = 401
    message = "Unauthorized"


class NotFoundError(ShortenerError):
    """Raised when a short code is empty or unknown."""

    status_code = 404
    message = "URL not found"


class ResolutionError(ShortenerError):
    """Raised when the redirect probe for a submitted URL fails.

    Covers transport failures, invalid or unsupported URLs and redirect
    responses whose Location header is missing or unparseable.
    """

    message = "Failed to resolve redirection"


class PersistenceError(ShortenerError):
    """Raised when the datastore fails for any reason other than "no rows"."""

    message = "Datastore failure"


class ShortCodeConflictError(PersistenceError):
    """Raised when inserting a short code that already exists."""

    message = "Short code already exists"
