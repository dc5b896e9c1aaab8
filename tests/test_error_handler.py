from catalog.domain.failures import (
    CacheFailure,
    ForbiddenFailure,
    NetworkFailure,
    NotFoundFailure,
    ServerFailure,
    UnauthorizedFailure,
    ValidationFailure,
)
from catalog.error_handler import ErrorHandler


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["type"] == "InternalError"
    assert "internal error" in out["message"].lower()
    assert "boom" in out["metadata"]["error"]
    assert out["metadata"]["context"] == {"k": "v"}


def test_status_for_each_failure_type():
    eh = ErrorHandler()
    assert eh.status_for(ValidationFailure("bad")) == 422
    assert eh.status_for(NotFoundFailure("missing")) == 404
    assert eh.status_for(UnauthorizedFailure("who")) == 401
    assert eh.status_for(ForbiddenFailure("no")) == 403
    assert eh.status_for(NetworkFailure("offline")) == 503
    assert eh.status_for(CacheFailure("disk")) == 500
    assert eh.status_for(ServerFailure("down")) == 502


def test_wrapped_failure_reports_its_cause():
    try:
        try:
            raise NetworkFailure("No network connection and no cached data available")
        except NetworkFailure as e:
            raise ServerFailure(f"Failed to get products: {e}") from e
    except ServerFailure as wrapped:
        status, body = ErrorHandler().to_response(wrapped, {"path": "/api/v1/products"})

    assert status == 503
    assert body["type"] == "NetworkFailure"
    assert body["message"].startswith("Failed to get products")
    assert body["metadata"]["context"] == {"path": "/api/v1/products"}


def test_to_response_with_code():
    status, body = ErrorHandler().to_response(ServerFailure("Bad gateway", code="500"))

    assert status == 502
    assert body["code"] == "500"


def test_to_response_for_plain_exception():
    status, body = ErrorHandler().to_response(RuntimeError("kaput"))

    assert status == 500
    assert body["type"] == "InternalError"
