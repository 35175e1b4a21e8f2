from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, StrictStr


class ChatRequest(BaseModel):
    prompt: Optional[StrictStr] = Field(
        default=None, description="User prompt relayed to the upstream model."
    )


class ErrorEnvelope(BaseModel):
    error: str = Field(..., description="Human-readable failure reason.")


class GatewayConfig(BaseModel):
    """Gateway identity shared by every request for the life of the process."""

    gateway_id: str = Field(..., description="AI gateway identifier.")
    gateway_token: str = Field(..., description="Bearer token for the gateway.")

    model_config = {"frozen": True}
