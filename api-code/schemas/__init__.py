from .chat import ChatRequest, ErrorEnvelope, GatewayConfig
from .health import HealthResponse

__all__ = [
    "ChatRequest",
    "ErrorEnvelope",
    "GatewayConfig",
    "HealthResponse",
]
