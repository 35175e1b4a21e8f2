from .gateway_client import AIGatewayClient
from .relay_service import (
    ChatRequestError,
    GatewayClient,
    RelayReply,
    RelayService,
    parse_chat_request,
)

__all__ = [
    "AIGatewayClient",
    "ChatRequestError",
    "GatewayClient",
    "RelayReply",
    "RelayService",
    "parse_chat_request",
]
