from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from cors import PathPrefixCORSMiddleware
from routers import build_chat_router, build_health_router
from services import AIGatewayClient, GatewayClient, RelayService
from settings import Settings, get_settings


logger = logging.getLogger("chat-relay")


def create_app(
    settings: Optional[Settings] = None,
    gateway_client: Optional[GatewayClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    owned_client: Optional[AIGatewayClient] = None
    if gateway_client is None:
        owned_client = AIGatewayClient(
            settings.ai_gateway_account_id,
            api_base=settings.ai_gateway_api_base,
            timeout_seconds=settings.upstream_timeout_seconds,
        )
        gateway_client = owned_client

    app = FastAPI(
        title="Chat Relay API",
        version="0.1.0",
        description="Relays chat prompts to an upstream model through an AI gateway.",
    )

    app.add_middleware(
        PathPrefixCORSMiddleware,
        path_prefix=settings.cors_path_prefix,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=settings.allowed_methods,
        allow_headers=["*"],
    )

    relay_service = RelayService(gateway_client, model_name=settings.chat_model)
    app.include_router(build_chat_router(relay_service, settings.gateway_config()))
    app.include_router(build_health_router(settings))

    missing = settings.missing_gateway_settings()
    if missing:
        logger.warning(
            "Gateway settings missing (%s); chat requests will fail upstream.",
            ", ".join(missing),
        )
    else:
        logger.info("Relaying chat prompts to model %s.", settings.chat_model)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if owned_client is not None:
            await owned_client.aclose()

    return app
