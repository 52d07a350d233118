"""Shared JSON-over-HTTP transport for hosted providers without an SDK."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from packages.unified_llm.errors import ApiError

logger = logging.getLogger(__name__)


class JSONHTTPClient:
    """Posts JSON payloads to a provider REST API."""

    provider: str = "base"
    base_url: str = ""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http_client = httpx.AsyncClient(
            base_url=base_url or self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded JSON body.

        Raises:
            ApiError: On transport failures, non-2xx responses and bodies
                that are not JSON.
        """
        logger.debug("POST %s%s", self.provider, path)
        try:
            response = await self._http_client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                f"{self.provider} API error {e.response.status_code}: {self._error_message(e.response)}",
                provider=self.provider,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(f"{self.provider} API error: {e}", provider=self.provider) from e
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"{self.provider} API error: response is not valid JSON",
                provider=self.provider,
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                return str(error.get("message", error))
            return str(body.get("message") or body.get("detail") or error or body)
        return response.text

    async def aclose(self) -> None:
        await self._http_client.aclose()
