from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field

from schemas import GatewayConfig


DEFAULT_GATEWAY_API_BASE = "https://gateway.ai.cloudflare.com/v1"
DEFAULT_CHAT_MODEL = "google-ai-studio/gemini-2.5"


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    ai_gateway_account_id: Optional[str] = Field(
        default=None,
        alias="AI_GATEWAY_ACCOUNT_ID",
        description="Account that owns the AI gateway.",
    )
    ai_gateway_id: Optional[str] = Field(
        default=None, alias="AI_GATEWAY_ID", description="AI gateway identifier"
    )
    ai_gateway_token: Optional[str] = Field(
        default=None,
        alias="AI_GATEWAY_TOKEN",
        description="Bearer token sent in the cf-aig-authorization header.",
    )
    ai_gateway_api_base: str = Field(
        default=DEFAULT_GATEWAY_API_BASE,
        alias="AI_GATEWAY_API_BASE",
        description="Root URL of the gateway API; account and gateway ids are appended.",
    )
    chat_model: str = Field(
        default=DEFAULT_CHAT_MODEL,
        alias="CHAT_MODEL",
        description="Provider-prefixed model requested for every chat completion.",
    )
    upstream_timeout_seconds: float = Field(
        default=600.0,
        alias="UPSTREAM_TIMEOUT_SECONDS",
        description="Timeout for the upstream chat-completion request.",
    )
    cors_allow_origins: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    cors_allow_methods: str = Field(
        default="POST,GET,OPTIONS",
        alias="CORS_ALLOW_METHODS",
        description="Comma-separated list of methods advertised in CORS preflights.",
    )
    cors_path_prefix: str = Field(
        default="/api/",
        alias="CORS_PATH_PREFIX",
        description="Only requests under this path prefix get CORS handling.",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    relay_host: str = Field(default="0.0.0.0", alias="RELAY_HOST")
    relay_port: int = Field(default=9001, alias="RELAY_PORT")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)

    @property
    def allowed_origins(self) -> List[str]:
        return _split_csv(self.cors_allow_origins)

    @property
    def allowed_methods(self) -> List[str]:
        return [method.upper() for method in _split_csv(self.cors_allow_methods)]

    def gateway_config(self) -> GatewayConfig:
        return GatewayConfig(
            gateway_id=self.ai_gateway_id or "",
            gateway_token=self.ai_gateway_token or "",
        )

    def missing_gateway_settings(self) -> List[str]:
        missing = []
        if not self.ai_gateway_account_id:
            missing.append("AI_GATEWAY_ACCOUNT_ID")
        if not self.ai_gateway_id:
            missing.append("AI_GATEWAY_ID")
        if not self.ai_gateway_token:
            missing.append("AI_GATEWAY_TOKEN")
        return missing


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()
