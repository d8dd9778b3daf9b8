"""Domain Exceptions

Raised by the service layer and translated to HTTP responses by the
exception handlers registered in ``app.main``.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors the API maps to a status code"""

    code: str = "SERVICE_ERROR"
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthenticated(ServiceError):
    """No caller identity was attached to the request"""

    code = "UNAUTHENTICATED"
    message = "Unauthorized - User not authenticated"


class AggregationFailure(ServiceError):
    """
    A data-store query failed while building a dashboard report.

    The original exception is kept on ``cause`` (and as ``__cause__`` when
    raised with ``from``) so the boundary can report it.
    """

    code = "AGGREGATION_FAILED"
    message = "Failed to fetch dashboard data"

    def __init__(self, cause: BaseException, message: Optional[str] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def detail(self) -> str:
        return str(self.cause) or type(self.cause).__name__
