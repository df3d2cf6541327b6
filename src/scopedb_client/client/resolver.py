"""
Response resolution.

Turns the final attempt outcome of an operation into either a parsed value
or one of the three client errors. This is the only place outcomes are
classified; which retry policy produced the outcome is irrelevant.
"""

from typing import Callable, Optional, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError

from scopedb_client.client.exceptions import DecodeError, RemoteError, TransportError
from scopedb_client.models.outcomes import AttemptOutcome, HttpResponse, TransportFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Error bodies are echoed into exception messages; keep them readable.
MAX_ERROR_MESSAGE_CHARS = 2000


class ResponseResolver:
    """
    Maps an AttemptOutcome to a value or raises a ScopeDBError.

    - TransportFailure -> TransportError
    - 2xx -> parse(body), or DecodeError if parsing fails
    - non-2xx -> RemoteError(status_code, message)
    """

    def resolve(self, outcome: AttemptOutcome, parse: Callable[[bytes], T]) -> T:
        if isinstance(outcome, TransportFailure):
            raise TransportError(
                f"No response from ScopeDB: {outcome}",
                details={"error_type": type(outcome.error).__name__},
            ) from outcome.error

        if outcome.is_success:
            return self._parse_success(outcome, parse)

        raise self._remote_error(outcome)

    def _parse_success(self, response: HttpResponse, parse: Callable[[bytes], T]) -> T:
        try:
            return parse(response.content)
        except (PydanticValidationError, ValueError, TypeError) as e:
            logger.error(
                "Failed to decode ScopeDB response",
                status_code=response.status_code,
                error=str(e),
                content_snippet=response.content[:200],
            )
            raise DecodeError(
                "Invalid response body from ScopeDB",
                details={
                    "status_code": response.status_code,
                    "parse_error": str(e),
                },
            ) from e

    def _remote_error(self, response: HttpResponse) -> RemoteError:
        if response.body_error is not None:
            error = RemoteError(
                response.status_code,
                f"failed to read error body: {response.body_error}",
                details={"body_error_type": type(response.body_error).__name__},
            )
            error.__cause__ = response.body_error
            return error

        try:
            message = self._error_message(response)
        except (UnicodeDecodeError, LookupError) as e:
            error = RemoteError(
                response.status_code,
                f"failed to decode error body: {e}",
                details={"body_error_type": type(e).__name__},
            )
            error.__cause__ = e
            return error

        logger.info(
            "ScopeDB returned an error response",
            status_code=response.status_code,
            error_message=message,
        )
        return RemoteError(response.status_code, message)

    @staticmethod
    def _error_message(response: HttpResponse) -> Optional[str]:
        """Text of an error body, preferring a JSON ``message`` field."""
        text = response.text().strip()
        if not text:
            return None

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            text = payload["message"]

        return text[:MAX_ERROR_MESSAGE_CHARS]
