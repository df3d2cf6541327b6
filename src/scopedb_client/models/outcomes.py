"""
Attempt outcomes.

One network attempt yields exactly one outcome: either the transport
failed before a response was obtained, or a response arrived with some
status code. Outcomes are frozen and consumed by the retry policy and the
response resolver.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class TransportFailure:
    """
    No response was obtained (connect, timeout, protocol-level failure).

    Attributes:
        error: The underlying transport exception
    """

    error: BaseException

    def __str__(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True)
class HttpResponse:
    """
    A response with a status line.

    Attributes:
        status_code: HTTP status code
        content: Raw body bytes (empty if the body could not be read)
        encoding: Charset announced by the server, if any
        body_error: Failure raised while reading a non-2xx body
    """

    status_code: int
    content: bytes = b""
    encoding: Optional[str] = None
    body_error: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if not 100 <= self.status_code <= 599:
            raise ValueError(f"invalid HTTP status code: {self.status_code}")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        """
        Decode the body as text.

        Raises:
            UnicodeDecodeError: Body is not valid in the announced charset
            LookupError: Announced charset is unknown
        """
        return self.content.decode(self.encoding or "utf-8")

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ValueError: Body is not valid JSON (json.JSONDecodeError and
                UnicodeDecodeError are both ValueError subclasses)
        """
        return json.loads(self.content)


AttemptOutcome = Union[TransportFailure, HttpResponse]
