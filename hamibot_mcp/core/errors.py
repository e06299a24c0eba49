# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Three kinds of failure exist in this system:
#
#   InvalidArgument     → caller sent bad data (e.g. a malformed script ID).
#                         Raised by the schemas before any network call.
#   GatewayError        → the Hamibot API call failed (network, non-2xx,
#                         unparseable body).  Tool handlers turn this into
#                         a normal reply with an "error" field.
#   ConfigurationError  → a required setting is missing or invalid at
#                         startup.  Fatal: the process exits.
# =============================================================================

from typing import Optional


UNKNOWN_ERROR = "Unknown error"


class HamibotError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(HamibotError, ValueError):
    """An argument failed schema validation.

    Subclasses ValueError so pydantic reports it as a field validation
    error when raised from a validator.
    """


class GatewayError(HamibotError):
    """An upstream call failed.

    Attributes:
        status_code: HTTP status of the upstream response, if one arrived.
        body: Raw upstream response text, if one arrived.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(HamibotError):
    """A required setting is missing or malformed."""


def describe_error(error: BaseException) -> str:
    """Return a human-readable message for any exception.

    An exception with no text is described by its class name (httpx raises
    ReadTimeout() and friends without a message).  Only a bare Exception with
    no text falls back to "Unknown error".
    """
    message = str(error).strip()
    if message:
        return message
    if type(error) is Exception:
        return UNKNOWN_ERROR
    return type(error).__name__
