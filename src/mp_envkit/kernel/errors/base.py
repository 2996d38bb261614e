"""Root error class for the mp-envkit error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Errors are returned inside ``Err`` far more often than they are raised,
    so the original failure is kept on ``cause`` (and chained as
    ``__cause__``) for when a caller does ``unwrap()``.

    Args:
        message: Human-readable description; also ``str(error)``.
        code: Machine-readable slug (defaults to ``default_code``).
        cause: Underlying exception, if any.
    """

    default_code: str = "base_error"

    def __init__(self, message: str, *, code: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for structured log fields."""
        payload: dict[str, Any] = {"error": type(self).__name__, "code": self.code, "message": self.message}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
