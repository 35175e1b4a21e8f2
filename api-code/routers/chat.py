from __future__ import annotations

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from schemas import GatewayConfig
from services import RelayReply, RelayService


def build_chat_router(relay_service: RelayService, gateway_config: GatewayConfig) -> APIRouter:
    """Create the chat router wired to the relay service and gateway config."""
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post("/chat")
    async def chat_endpoint(request: Request) -> Response:
        raw_body = await request.body()
        reply = await relay_service.handle(raw_body, gateway_config)
        return _to_response(reply)

    return router


def _to_response(reply: RelayReply) -> Response:
    if reply.raw_body is not None:
        return Response(
            content=reply.raw_body,
            status_code=reply.status_code,
            media_type="application/json",
        )
    return JSONResponse(content=reply.payload, status_code=reply.status_code)
