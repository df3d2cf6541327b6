"""
Exceptions surfaced by the ScopeDB client.

Every public client operation either returns a parsed response or raises
exactly one of the three ScopeDBError subclasses below. Raw transport
exceptions never escape; the original cause stays on ``__cause__``.
"""

from typing import Optional


class ScopeDBError(Exception):
    """
    Base exception for all ScopeDB client errors.

    Catch this to handle any classified client failure with a single
    except clause.
    """

    kind = "error"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransportError(ScopeDBError):
    """
    No response was obtained from the service.

    Covers connection failures, timeouts and protocol errors. Raised only
    once the retry policy has given up on the operation.
    """

    kind = "transport"


class RemoteError(ScopeDBError):
    """
    The service answered with a non-2xx status.

    Never retried. ``error_message`` is the best-effort decoded error body
    (None for an empty body).
    """

    kind = "remote"

    def __init__(
        self,
        status_code: int,
        error_message: Optional[str],
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.error_message = error_message
        text = f"ScopeDB returned HTTP {status_code}"
        if error_message:
            text = f"{text}: {error_message}"
        super().__init__(text, details={"status_code": status_code, **(details or {})})


class DecodeError(ScopeDBError):
    """
    A 2xx response body could not be parsed into the expected shape.

    Indicates a protocol mismatch rather than a transient fault, so it is
    never retried.
    """

    kind = "decode"
