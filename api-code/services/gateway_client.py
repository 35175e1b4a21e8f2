from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from domain import GatewayError, GatewayErrorKind

# Auth flows through cf-aig-authorization; the provider key slot only needs a value.
PLACEHOLDER_API_KEY = "unused"
GATEWAY_AUTH_HEADER = "cf-aig-authorization"
# OpenAI SDK default
DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 600.0


class AIGatewayClient:
    """Talks to an AI gateway's OpenAI-compatible endpoint over HTTP.

    The same pooled ``httpx.AsyncClient`` serves every request; the gateway
    configuration never changes while the process is running.
    """

    def __init__(
        self,
        account_id: Optional[str],
        *,
        api_base: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
    ):
        self.account_id = account_id
        self.api_base = api_base.rstrip("/")
        self.timeout = httpx.Timeout(timeout_seconds)
        self._http_client = http_client
        self._owns_http_client = http_client is None

    async def resolve_compat_url(self, gateway_id: str) -> str:
        if not self.account_id:
            raise GatewayError(
                GatewayErrorKind.RESOLUTION, "AI gateway account id is not configured"
            )
        if not gateway_id:
            raise GatewayError(GatewayErrorKind.RESOLUTION, "AI gateway id is not configured")
        return (
            f"{self.api_base}/{quote(self.account_id, safe='')}"
            f"/{quote(gateway_id, safe='')}/compat"
        )

    async def create_completion(
        self,
        base_url: str,
        gateway_token: str,
        *,
        model: str,
        messages: List[Dict[str, str]],
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {PLACEHOLDER_API_KEY}"}
        if gateway_token:
            headers[GATEWAY_AUTH_HEADER] = f"Bearer {gateway_token}"

        try:
            response = await self._client().post(
                f"{base_url}/chat/completions",
                json={"model": model, "messages": messages},
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise GatewayError(GatewayErrorKind.NETWORK, str(exc) or None) from exc

        if not response.is_success:
            raise GatewayError(
                GatewayErrorKind.PROVIDER,
                f"Upstream returned HTTP {response.status_code}",
                status_code=response.status_code,
                raw_body=response.text,
            )

        try:
            completion = response.json()
        except ValueError as exc:
            raise GatewayError(
                GatewayErrorKind.PARSE, "Upstream returned a non-JSON completion"
            ) from exc
        if not isinstance(completion, dict):
            raise GatewayError(
                GatewayErrorKind.PARSE, "Upstream completion is not a JSON object"
            )
        return completion

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client
