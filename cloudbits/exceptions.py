"""
Exceptions raised by the cloudBit notifications client.
"""
from typing import Optional


class CloudbitsError(Exception):
    """
    Base exception for all cloudbits errors.

    Attributes:
        code: Machine-readable error code
        detail: Human-readable description of what failed
    """
    code = "Cloudbits_Error"

    def __init__(self, detail: str, code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if code is not None:
            self.code = code


class InvalidParameterError(CloudbitsError):
    """Raised before any network call when a required argument is missing or empty."""
    code = "Invalid_Parameter"


class TransportError(CloudbitsError):
    """Raised when an HTTP call fails, returns a non-2xx status, or returns a malformed body."""
    code = "Transport_Error"

    def __init__(self, detail: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(detail, code=code)
        self.status_code = status_code


class ConfigurationError(CloudbitsError):
    """Raised when configuration (such as an event mapping file) is invalid."""
    code = "Invalid_Configuration"
