from .gateway_errors import UPSTREAM_ERROR_MESSAGE, GatewayError, GatewayErrorKind

__all__ = ["GatewayError", "GatewayErrorKind", "UPSTREAM_ERROR_MESSAGE"]
