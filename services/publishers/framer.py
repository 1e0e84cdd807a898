"""Framer adapter — Framer API v3 CMS items. One call, no publish step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, require_id

log = structlog.get_logger()

_PROVIDER = "Framer"
_API_BASE = "https://api.framer.com"


@dataclass(frozen=True, slots=True)
class FramerConfig:
    token: str
    project_id: str
    collection_id: str


class FramerAdapter:
    provider = _PROVIDER
    supports_scheduling = False
    supports_images = False
    supports_tags = True

    def __init__(self, config: FramerConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{_API_BASE}{path}",
            headers={"Authorization": f"Bearer {self._config.token}"},
            **kwargs,
        )

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", f"/v3/projects/{self._config.project_id}")
            return True
        except PublishError as exc:
            log.warning("framer_validate_failed", project_id=self._config.project_id, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        item: dict[str, Any] = {
            "title": input.title,
            "body": input.html,
            "excerpt": input.excerpt,
            "tags": list(input.tags),
            "slug": input.slug,
        }
        path = f"/v3/projects/{self._config.project_id}/cms/collections/{self._config.collection_id}/items"
        data = await self._api(
            "POST",
            path,
            json={"item": {k: v for k, v in item.items() if v is not None}},
        )
        created = data.get("item") or {}
        item_id = require_id(_PROVIDER, created.get("id"))
        log.info("framer_published", item_id=item_id)
        return PublishResult(external_id=item_id, url=created.get("url"))
