from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="'ok' or 'degraded'.")
    model: str = Field(..., description="Model requested from the upstream provider.")
    gateway_configured: bool = Field(
        ..., description="True when every gateway setting is present."
    )
    issues: List[str] = Field(default_factory=list)
