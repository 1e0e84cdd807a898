"""Webflow adapter — CMS API v1, Bearer token (site token or OAuth).

Two-phase publish: create the collection item, then publish it by id.
A created-but-unpublished item is not visible on the live site.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import PublishError

from .base import PublishInput, PublishResult, api_request, require_id

log = structlog.get_logger()

_PROVIDER = "Webflow"
_API_BASE = "https://api.webflow.com"
_ACCEPT_VERSION = "1.0.0"

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True, slots=True)
class WebflowConfig:
    token: str
    site_id: str
    collection_id: str


def slugify(title: str) -> str:
    """'Hello, World!' -> 'hello-world'."""
    return _SLUG_SEPARATORS.sub("-", title.lower()).strip("-")


class WebflowAdapter:
    """Webflow CMS collection items."""

    provider = _PROVIDER
    supports_scheduling = False
    supports_images = False
    supports_tags = True

    def __init__(self, config: WebflowConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{_API_BASE}{path}",
            headers={
                "Authorization": f"Bearer {self._config.token}",
                "accept-version": _ACCEPT_VERSION,
            },
            **kwargs,
        )

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", f"/sites/{self._config.site_id}")
            return True
        except PublishError as exc:
            log.warning("webflow_validate_failed", site_id=self._config.site_id, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        collection = f"/collections/{self._config.collection_id}"
        # Field keys must match the collection schema
        fields: dict[str, Any] = {
            "name": input.title,
            "slug": input.slug or slugify(input.title),
            "_archived": False,
            "_draft": False,
            "body": input.html,
            "tags": list(input.tags),
        }
        if input.excerpt is not None:
            fields["summary"] = input.excerpt

        item = await self._api("POST", f"{collection}/items", json={"fields": fields})
        item_id = require_id(_PROVIDER, item.get("_id"))
        log.info("webflow_item_created", item_id=item_id, collection_id=self._config.collection_id)

        await self._api("POST", f"{collection}/items/publish", json={"itemIds": [item_id]})
        log.info("webflow_item_published", item_id=item_id)
        return PublishResult(external_id=item_id)
