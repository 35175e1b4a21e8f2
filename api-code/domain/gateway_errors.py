from __future__ import annotations

from enum import Enum
from typing import Optional


UPSTREAM_ERROR_MESSAGE = "Upstream error"
DEFAULT_UPSTREAM_STATUS = 502


class GatewayErrorKind(str, Enum):
    RESOLUTION = "resolution"
    NETWORK = "network"
    PROVIDER = "provider"
    PARSE = "parse"

    @property
    def carries_provider_body(self) -> bool:
        return self is GatewayErrorKind.PROVIDER


class GatewayError(Exception):
    """Failure talking to the AI gateway, tagged with what went wrong.

    ``status_code`` is the HTTP status reported by the upstream (if any) and
    ``raw_body`` the upstream response text exactly as received.
    """

    def __init__(
        self,
        kind: GatewayErrorKind,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        raw_body: Optional[str] = None,
    ):
        super().__init__(message or UPSTREAM_ERROR_MESSAGE)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.raw_body = raw_body

    @property
    def forwardable_body(self) -> Optional[str]:
        if self.kind.carries_provider_body and self.raw_body:
            return self.raw_body
        return None

    def resolved_status(self, default: int = DEFAULT_UPSTREAM_STATUS) -> int:
        return self.status_code if self.status_code is not None else default

    def __repr__(self) -> str:
        return (
            f"GatewayError(kind={self.kind.value!r}, status_code={self.status_code!r}, "
            f"message={self.message!r})"
        )
