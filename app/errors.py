"""
ERRORS MODULE
=============

Exception types raised by the services and turned into JSON error responses
by the route handlers in app.main. Services never build HTTP responses
themselves; they raise one of these and the API layer picks the status code.

  InvalidInput         - missing or malformed request fields (400).
  UnknownDiscriminant  - demo `type` is not one of the recognized demos (400).
  InternalFailure      - unexpected fault inside a handler (500).
"""

from typing import Optional


class PortfolioError(Exception):
    """Base class for all errors the API layer knows how to report."""

    status_code = 500

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidInput(PortfolioError):
    status_code = 400


class UnknownDiscriminant(PortfolioError):
    """Raised when a demo request names a `type` no kernel handles. Keeps the value for diagnostics."""

    status_code = 400

    def __init__(self, received_type: object):
        super().__init__("Unknown demo type")
        self.received_type = received_type


class InternalFailure(PortfolioError):
    status_code = 500
