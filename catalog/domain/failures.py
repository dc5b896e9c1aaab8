from __future__ import annotations

from typing import Optional


class Failure(Exception):
    """Base class for every failure raised by the catalog layers."""

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message and self.code == other.code

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, self.code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r})"


class ServerFailure(Failure):
    pass


class CacheFailure(Failure):
    pass


class NetworkFailure(Failure):
    pass


class ValidationFailure(Failure):
    pass


class NotFoundFailure(Failure):
    pass


class UnauthorizedFailure(Failure):
    pass


class ForbiddenFailure(Failure):
    pass
