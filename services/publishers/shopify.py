"""Shopify adapter — Admin REST API (versioned), blog articles.

Auth: X-Shopify-Access-Token header.
Scheduling is Shopify's own: published=False plus a future published_at.
Tags go out as one comma-joined string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, require_id

log = structlog.get_logger()

_PROVIDER = "Shopify"
DEFAULT_API_VERSION = "2024-07"


@dataclass(frozen=True, slots=True)
class ShopifyConfig:
    store_domain: str  # mystore.myshopify.com
    access_token: str  # Admin API token
    blog_id: int
    api_version: str = DEFAULT_API_VERSION


class ShopifyAdapter:
    """Shopify blog articles at /admin/api/{version}/blogs/{id}/articles.json."""

    provider = _PROVIDER
    supports_scheduling = True
    supports_images = False
    supports_tags = True

    def __init__(self, config: ShopifyConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    @property
    def base_url(self) -> str:
        return f"https://{self._config.store_domain}/admin/api/{self._config.api_version}"

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{self.base_url}{path}",
            headers={"X-Shopify-Access-Token": self._config.access_token},
            **kwargs,
        )

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", f"/blogs/{self._config.blog_id}.json")
            return True
        except PublishError as exc:
            log.warning("shopify_validate_failed", store=self._config.store_domain, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        article: dict[str, Any] = {
            "title": input.title,
            "body_html": input.html,
            "tags": ", ".join(input.tags),
            "published": not input.when,
        }
        if input.when:
            article["published_at"] = input.when
        if input.excerpt is not None:
            article["summary_html"] = input.excerpt

        data = await self._api("POST", f"/blogs/{self._config.blog_id}/articles.json", json={"article": article})
        created = data.get("article") or {}
        article_id = require_id(_PROVIDER, created.get("id"))

        handle = created.get("handle")
        url = f"https://{self._config.store_domain}/blogs/{self._config.blog_id}/{handle}" if handle else None
        log.info("shopify_published", article_id=article_id, scheduled=bool(input.when))
        return PublishResult(external_id=article_id, url=url)
