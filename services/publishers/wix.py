"""Wix adapter — Wix Blog REST API v3.

Auth: the raw access token in Authorization (no "Bearer" prefix).
Scheduling needs both fields: status=DRAFT + publishStatus=SCHEDULED.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, require_id

log = structlog.get_logger()

_PROVIDER = "Wix"
_API_BASE = "https://www.wixapis.com"


@dataclass(frozen=True, slots=True)
class WixConfig:
    access_token: str
    blog_id: str


class WixAdapter:
    """Wix Blog posts."""

    provider = _PROVIDER
    supports_scheduling = True
    supports_images = False
    supports_tags = True

    def __init__(self, config: WixConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{_API_BASE}{path}",
            headers={"Authorization": self._config.access_token},
            **kwargs,
        )

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", "/blog/v3/blogs")
            return True
        except PublishError as exc:
            log.warning("wix_validate_failed", status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        post: dict[str, Any] = {
            "title": input.title,
            "content": {"html": input.html},
            "tags": list(input.tags),
        }
        if input.excerpt is not None:
            post["excerpt"] = input.excerpt
        if input.when:
            post.update(status="DRAFT", publishStatus="SCHEDULED", publishDate=input.when)
        else:
            post.update(status="PUBLISHED", publishStatus="PUBLISHED")

        data = await self._api("POST", "/blog/v3/posts", json={"post": post})
        created = data.get("post") or {}
        post_id = require_id(_PROVIDER, created.get("id"))
        log.info("wix_published", post_id=post_id, scheduled=bool(input.when))
        return PublishResult(external_id=post_id, url=created.get("url"))
