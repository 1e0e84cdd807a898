"""Notion adapter — creates a page in a database.

Notion does not accept HTML: the body is reduced to plain text by stripping
tags, so formatting is lost. Rich-text runs are capped at 2000 characters by
the API; longer text is split across several runs of one paragraph block.
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

_PROVIDER = "Notion"
_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"

_RICH_TEXT_LIMIT = 2000
_TAG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True, slots=True)
class NotionConfig:
    token: str
    database_id: str


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


def _rich_text(text: str) -> list[dict[str, Any]]:
    chunks = [text[i : i + _RICH_TEXT_LIMIT] for i in range(0, len(text), _RICH_TEXT_LIMIT)] or [""]
    return [{"type": "text", "text": {"content": chunk}} for chunk in chunks]


def _block(block_type: str, text: str) -> dict[str, Any]:
    return {"object": "block", "type": block_type, block_type: {"rich_text": _rich_text(text)}}


class NotionAdapter:
    provider = _PROVIDER
    supports_scheduling = False
    supports_images = False
    supports_tags = True  # multi-select "Tags" property

    def __init__(self, config: NotionConfig, http_client: httpx.AsyncClient) -> None:
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
                "Notion-Version": NOTION_VERSION,
            },
            **kwargs,
        )

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", f"/databases/{self._config.database_id}")
            return True
        except PublishError as exc:
            log.warning("notion_validate_failed", database_id=self._config.database_id, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        properties: dict[str, Any] = {
            "Name": {"title": [{"text": {"content": input.title}}]},
        }
        if input.tags:
            properties["Tags"] = {"multi_select": [{"name": tag} for tag in input.tags]}

        children = [_block("heading_2", input.title)]
        if input.excerpt:
            children.append(_block("paragraph", input.excerpt))
        children.append(_block("paragraph", strip_tags(input.html)))

        page = await self._api(
            "POST",
            "/pages",
            json={
                "parent": {"database_id": self._config.database_id},
                "properties": properties,
                "children": children,
            },
        )
        page_id = require_id(_PROVIDER, page.get("id"))
        log.info("notion_published", page_id=page_id)
        return PublishResult(external_id=page_id, url=page.get("url"))
