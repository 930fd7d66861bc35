"""Exceptions raised while submitting routes to a fleet provider"""

from typing import Optional


class RouteSubmissionError(Exception):
    """Base class for every route submission failure"""
    pass


class ValidationError(RouteSubmissionError, ValueError):
    """Input rejected before any network activity"""

    def __init__(self, message: str, field: str, index: Optional[int] = None):
        super().__init__(message)
        self.field = field
        self.index = index


class RemoteServiceError(RouteSubmissionError):
    """The provider answered with a non-success status"""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"Fleet API returned {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason


class NetworkError(RouteSubmissionError):
    """Transport-level failure (connection refused, timeout, DNS, ...)"""
    pass


class ResponseFormatError(RouteSubmissionError):
    """Response body is not JSON or lacks data.id"""
    pass
