from __future__ import annotations

from fastapi import APIRouter

from schemas import HealthResponse
from settings import Settings


def build_health_router(settings: Settings) -> APIRouter:
    router = APIRouter()

    @router.get("/healthz", response_model=HealthResponse)
    async def healthcheck() -> HealthResponse:
        issues = [f"{name} is not set." for name in settings.missing_gateway_settings()]
        return HealthResponse(
            status="ok" if not issues else "degraded",
            model=settings.chat_model,
            gateway_configured=not issues,
            issues=issues,
        )

    return router
