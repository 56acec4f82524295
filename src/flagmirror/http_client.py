"""Management API adapter over HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from .adapters import ApiAdapter
from .config import ApiSection
from .exceptions import RemoteFetchError
from .models import RemoteEnvironment, RemoteFlag

logger = structlog.get_logger(__name__)


@dataclass
class ApiAdapterConfig:
    """Connection settings for HttpApiAdapter."""

    base_url: str
    access_token: str = ""
    timeout_seconds: float = 10.0
    page_size: int = 100

    @classmethod
    def from_section(cls, section: ApiSection) -> ApiAdapterConfig:
        return cls(
            base_url=section.base_url,
            access_token=section.access_token,
            timeout_seconds=section.timeout_seconds,
            page_size=section.page_size,
        )


class HttpApiAdapter(ApiAdapter):
    """httpx based management API client."""

    def __init__(self, config: ApiAdapterConfig) -> None:
        self._config = config
        headers: dict[str, str] = {"Accept": "application/json"}
        if config.access_token:
            headers["Authorization"] = config.access_token
        self._headers = headers

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        context: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"{context}: {e}", cause=e) from e
        if resp.status_code >= 400:
            raise RemoteFetchError(
                f"{context}: HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        try:
            data: dict[str, Any] = resp.json()
        except ValueError as e:
            raise RemoteFetchError(f"{context}: invalid JSON response", cause=e) from e
        return data

    async def get_sdk_key(self, cloud_project_key: str, environment_key: str) -> str:
        async with self._make_client() as client:
            data = await self._get_json(
                client,
                f"/api/v2/projects/{cloud_project_key}/environments/{environment_key}",
                f"get_sdk_key({cloud_project_key}, {environment_key})",
            )
        sdk_key = data.get("apiKey")
        if not sdk_key:
            raise RemoteFetchError(
                f"get_sdk_key({cloud_project_key}, {environment_key}): response has no apiKey"
            )
        return str(sdk_key)

    async def get_all_flags(self, cloud_project_key: str) -> list[RemoteFlag]:
        context = f"get_all_flags({cloud_project_key})"
        flags: list[RemoteFlag] = []
        url: str | None = f"/api/v2/flags/{cloud_project_key}"
        params: dict[str, Any] | None = {"summary": 0, "limit": self._config.page_size}
        async with self._make_client() as client:
            while url:
                data = await self._get_json(client, url, context, params)
                flags.extend(RemoteFlag.from_dict(item) for item in data.get("items", []))
                # The next link already carries the paging query.
                url = data.get("_links", {}).get("next", {}).get("href")
                params = None
        logger.debug("fetched flags", cloud_project_key=cloud_project_key, count=len(flags))
        return flags

    async def get_project_environments(
        self, cloud_project_key: str, query: str, limit: int | None
    ) -> list[RemoteEnvironment]:
        params: dict[str, Any] = {}
        if query:
            params["filter"] = f"query:{query}"
        if limit is not None:
            params["limit"] = limit
        async with self._make_client() as client:
            data = await self._get_json(
                client,
                f"/api/v2/projects/{cloud_project_key}/environments",
                f"get_project_environments({cloud_project_key})",
                params,
            )
        return [RemoteEnvironment.from_dict(item) for item in data.get("items", [])]
