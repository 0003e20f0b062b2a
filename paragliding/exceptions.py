"""Error types raised by the stores and services and mapped to HTTP status codes by the API."""


class ParaglidingError(Exception):
    """Base class for application errors."""
    status_code = 500


class MalformedInput(ParaglidingError):
    """Request body failed to decode or a required field is missing."""
    status_code = 400


class IGCParseError(MalformedInput):
    """The submitted URL could not be fetched or parsed as an IGC file."""


class AlreadyExists(ParaglidingError):
    """A webhook with the same URL is already registered."""
    status_code = 409


class NotFound(ParaglidingError):
    """Lookup on an absent or malformed identifier."""
    status_code = 404
