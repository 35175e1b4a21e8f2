from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from domain import UPSTREAM_ERROR_MESSAGE, GatewayError, GatewayErrorKind
from schemas import ChatRequest, ErrorEnvelope, GatewayConfig


logger = logging.getLogger("chat-relay.relay")

NO_PROMPT_MESSAGE = "No prompt provided"
INVALID_JSON_MESSAGE = "Invalid JSON body"
PROMPT_NOT_STRING_MESSAGE = "Prompt must be a string"


class GatewayClient(Protocol):
    async def resolve_compat_url(self, gateway_id: str) -> str: ...

    async def create_completion(
        self,
        base_url: str,
        gateway_token: str,
        *,
        model: str,
        messages: List[Dict[str, str]],
    ) -> Dict[str, Any]: ...


class ChatRequestError(ValueError):
    """Raised when the inbound body cannot be turned into a ChatRequest."""


@dataclass(frozen=True)
class RelayReply:
    status_code: int
    payload: Any = None
    raw_body: Optional[str] = None

    @classmethod
    def error(cls, status_code: int, message: str) -> "RelayReply":
        return cls(status_code=status_code, payload=ErrorEnvelope(error=message).model_dump())


def parse_chat_request(raw_body: bytes | str) -> ChatRequest:
    try:
        return ChatRequest.model_validate_json(raw_body)
    except ValidationError as exc:
        # errors located at the root concern the body itself, not a field
        if any(not error["loc"] for error in exc.errors()):
            raise ChatRequestError(INVALID_JSON_MESSAGE) from exc
        # 0, false, [] and {} count as a missing prompt
        if any(not error.get("input") for error in exc.errors()):
            raise ChatRequestError(NO_PROMPT_MESSAGE) from exc
        raise ChatRequestError(PROMPT_NOT_STRING_MESSAGE) from exc


class RelayService:
    """Relays a single prompt to the AI gateway and shapes the reply."""

    def __init__(self, gateway_client: GatewayClient, model_name: str):
        self.gateway_client = gateway_client
        self.model_name = model_name

    async def handle(self, raw_body: bytes | str, config: GatewayConfig) -> RelayReply:
        try:
            request = parse_chat_request(raw_body)
        except ChatRequestError as exc:
            return RelayReply.error(400, str(exc))

        if not request.prompt:
            return RelayReply.error(400, NO_PROMPT_MESSAGE)

        try:
            base_url = await self.gateway_client.resolve_compat_url(config.gateway_id)
            completion = await self.gateway_client.create_completion(
                base_url,
                config.gateway_token,
                model=self.model_name,
                messages=[{"role": "user", "content": request.prompt}],
            )
        except GatewayError as exc:
            logger.error("Compat error (%s): %r", exc.kind.value, exc)
            return self._reply_for_gateway_error(exc)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected failure relaying chat prompt: %s", exc)
            return RelayReply.error(502, str(exc) or UPSTREAM_ERROR_MESSAGE)

        return RelayReply(status_code=200, payload=completion)

    @staticmethod
    def _reply_for_gateway_error(exc: GatewayError) -> RelayReply:
        status_code = exc.resolved_status()
        if exc.kind is GatewayErrorKind.PROVIDER:
            forwarded = exc.forwardable_body
            if forwarded is not None:
                return RelayReply(status_code=status_code, raw_body=forwarded)
        return RelayReply.error(status_code, exc.message or UPSTREAM_ERROR_MESSAGE)
