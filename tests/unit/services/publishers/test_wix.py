"""Tests for services/publishers/wix.py — Wix Blog v3 posts."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from core.exceptions import PublishError
from services.publishers.base import PublishInput
from services.publishers.wix import WixAdapter, WixConfig


def _make_adapter(handler: Callable[[httpx.Request], httpx.Response]) -> WixAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WixAdapter(WixConfig(access_token="RAW-TOKEN", blog_id="b1"), client)


class TestConnection:
    async def test_raw_token_header(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://www.wixapis.com/blog/v3/blogs"
            assert request.headers["Authorization"] == "RAW-TOKEN"
            return httpx.Response(200, json={"blogs": []})

        assert await _make_adapter(handler).test_connection() is True

    async def test_server_error(self) -> None:
        assert await _make_adapter(lambda r: httpx.Response(500)).test_connection() is False


class TestPublish:
    async def test_publish_now_statuses(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://www.wixapis.com/blog/v3/posts"
            seen.update(json.loads(request.content)["post"])
            return httpx.Response(200, json={"post": {"id": "wix-1", "url": "https://site.wix/post/wix-1"}})

        result = await _make_adapter(handler).publish(PublishInput(title="T", html="<p>x</p>", tags=["a"]))
        assert seen["status"] == "PUBLISHED"
        assert seen["publishStatus"] == "PUBLISHED"
        assert "publishDate" not in seen
        assert seen["content"] == {"html": "<p>x</p>"}
        assert seen["tags"] == ["a"]
        assert result.external_id == "wix-1"
        assert result.url == "https://site.wix/post/wix-1"

    async def test_scheduled_sets_draft_and_scheduled_together(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content)["post"])
            return httpx.Response(200, json={"post": {"id": "wix-2"}})

        await _make_adapter(handler).publish(PublishInput(title="T", html="x", when="2031-01-01T00:00:00Z"))
        assert seen["status"] == "DRAFT"
        assert seen["publishStatus"] == "SCHEDULED"
        assert seen["publishDate"] == "2031-01-01T00:00:00Z"

    async def test_missing_post_id_raises(self) -> None:
        adapter = _make_adapter(lambda r: httpx.Response(200, json={}))
        with pytest.raises(PublishError):
            await adapter.publish(PublishInput(title="T", html="x"))
