"""Error handling helpers for the catalog API."""
from typing import Any, Dict, Optional, Tuple
import logging

from catalog.domain.failures import (
    CacheFailure,
    Failure,
    ForbiddenFailure,
    NetworkFailure,
    NotFoundFailure,
    ServerFailure,
    UnauthorizedFailure,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

_STATUS_BY_FAILURE = [
    (ValidationFailure, 422),
    (NotFoundFailure, 404),
    (UnauthorizedFailure, 401),
    (ForbiddenFailure, 403),
    (NetworkFailure, 503),
    (CacheFailure, 500),
    (ServerFailure, 502),
]


def _root_failure(exc: Failure) -> Failure:
    # The repository wraps causes in ServerFailure; report the most specific one.
    cause = exc.__cause__
    while isinstance(cause, Failure):
        exc = cause
        cause = cause.__cause__
    return exc


class ErrorHandler:
    def status_for(self, exc: Failure) -> int:
        root = _root_failure(exc)
        for failure_type, status_code in _STATUS_BY_FAILURE:
            if isinstance(root, failure_type):
                return status_code
        return 500

    def to_response(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, Failure):
            status_code = self.status_for(exc)
            logger.warning("Catalog failure (%s): %s", status_code, exc.message)
            return status_code, {
                "message": exc.message,
                "code": exc.code,
                "type": type(_root_failure(exc)).__name__,
                "metadata": {"context": context or {}},
            }
        return 500, self.handle_exception(exc, context)

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in catalog API: %s", exc, exc_info=exc)
        return {
            "message": "An internal error occurred while processing your request. Please try again later.",
            "code": None,
            "type": "InternalError",
            "metadata": {"error": str(exc), "context": context or {}},
        }
