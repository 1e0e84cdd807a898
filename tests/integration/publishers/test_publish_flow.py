"""Integration tests: stored integration config → get_adapter() → publish().

Uses `respx` to mock every platform API. Each test exercises the real adapter
built by the factory from the camelCase config the dashboard stores.
"""

from __future__ import annotations

import base64
import json

import httpx
import pytest
import respx

from core.exceptions import PublishError
from services.publishers import PublishInput, get_adapter

pytestmark = pytest.mark.integration

_POST = PublishInput(
    title="Ten Ways to Rank",
    html="<h2>Intro</h2><p>Ranking <b>well</b> takes work.</p>",
    excerpt="A short summary",
    tags=["seo", "content"],
)

# ---------------------------------------------------------------------------
# WordPress (self-hosted)
# ---------------------------------------------------------------------------


class TestWordPressFlow:
    async def test_publish_with_featured_image(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        mock_api.get("https://cdn.example.com/hero.webp").mock(
            return_value=httpx.Response(200, content=b"RIFF", headers={"content-type": "image/webp"})
        )
        media = mock_api.post("https://blog.example.com/wp-json/wp/v2/media").mock(
            return_value=httpx.Response(201, json={"id": 55, "source_url": "https://blog.example.com/hero.webp"})
        )
        posts = mock_api.post("https://blog.example.com/wp-json/wp/v2/posts").mock(
            return_value=httpx.Response(201, json={"id": 901, "link": "https://blog.example.com/ten-ways"})
        )

        adapter = get_adapter(
            "wordpress",
            {"url": "https://blog.example.com/", "username": "admin", "password": "xxxx xxxx"},
            http_client,
        )
        result = await adapter.publish(
            PublishInput(title=_POST.title, html=_POST.html, image_url="https://cdn.example.com/hero.webp")
        )

        assert result.external_id == "901"
        assert result.url == "https://blog.example.com/ten-ways"
        expected_auth = "Basic " + base64.b64encode(b"admin:xxxx xxxx").decode()
        assert media.calls.last.request.headers["Authorization"] == expected_auth
        assert json.loads(posts.calls.last.request.content)["featured_media"] == 55


# ---------------------------------------------------------------------------
# WordPress.com
# ---------------------------------------------------------------------------


class TestWPComFlow:
    _SITE = "https://public-api.wordpress.com/rest/v1.1/sites/777"

    async def test_truncated_then_complete(
        self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient, no_sleep
    ) -> None:
        mock_api.post(f"{self._SITE}/posts/new").mock(
            side_effect=[
                httpx.Response(200, json={"ID": 1, "URL": "https://x.wordpress.com/1"}),
                httpx.Response(200, json={"ID": 2, "URL": "https://x.wordpress.com/2"}),
            ]
        )
        mock_api.get(host="public-api.wordpress.com", path="/rest/v1.1/sites/777/posts/1").mock(
            return_value=httpx.Response(200, json={"content": "<h2>"})
        )
        mock_api.get(host="public-api.wordpress.com", path="/rest/v1.1/sites/777/posts/2").mock(
            return_value=httpx.Response(200, json={"content": _POST.html})
        )
        delete = mock_api.post(f"{self._SITE}/posts/1/delete").mock(return_value=httpx.Response(200, json={}))

        adapter = get_adapter("wpcom", {"accessToken": "tok", "siteId": 777}, http_client)
        result = await adapter.publish(_POST)

        assert result.external_id == "2"
        assert result.url == "https://x.wordpress.com/2"
        assert delete.call_count == 1


# ---------------------------------------------------------------------------
# Webflow / Shopify / Wix / Notion / Framer
# ---------------------------------------------------------------------------


class TestWebflowFlow:
    async def test_create_then_publish(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        create = mock_api.post("https://api.webflow.com/collections/c1/items").mock(
            return_value=httpx.Response(200, json={"_id": "wf-42"})
        )
        publish = mock_api.post("https://api.webflow.com/collections/c1/items/publish").mock(
            return_value=httpx.Response(200, json={"publishedItemIds": ["wf-42"]})
        )

        adapter = get_adapter("webflow", {"token": "t", "siteId": "s1", "collectionId": "c1"}, http_client)
        result = await adapter.publish(_POST)

        assert result.external_id == "wf-42"
        assert json.loads(create.calls.last.request.content)["fields"]["slug"] == "ten-ways-to-rank"
        assert json.loads(publish.calls.last.request.content) == {"itemIds": ["wf-42"]}


class TestShopifyFlow:
    async def test_scheduled_article(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        route = mock_api.post("https://shop.myshopify.com/admin/api/2024-07/blogs/9/articles.json").mock(
            return_value=httpx.Response(201, json={"article": {"id": 3001, "handle": "ten-ways-to-rank"}})
        )

        adapter = get_adapter(
            "shopify", {"storeDomain": "shop.myshopify.com", "accessToken": "shpat", "blogId": "9"}, http_client
        )
        result = await adapter.publish(
            PublishInput(title="T", html="<p>x</p>", tags=["a", "b"], when="2030-06-01T08:00:00Z")
        )

        article = json.loads(route.calls.last.request.content)["article"]
        assert route.calls.last.request.headers["X-Shopify-Access-Token"] == "shpat"
        assert article["published"] is False
        assert article["published_at"] == "2030-06-01T08:00:00Z"
        assert article["tags"] == "a, b"
        assert result.external_id == "3001"
        assert result.url == "https://shop.myshopify.com/blogs/9/ten-ways-to-rank"

    async def test_error_surface(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        mock_api.post("https://shop.myshopify.com/admin/api/2024-07/blogs/9/articles.json").mock(
            return_value=httpx.Response(422, text='{"errors":{"title":["can\'t be blank"]}}')
        )
        adapter = get_adapter(
            "shopify", {"storeDomain": "shop.myshopify.com", "accessToken": "shpat", "blogId": 9}, http_client
        )
        with pytest.raises(PublishError, match="Shopify error 422"):
            await adapter.publish(_POST)


class TestWixFlow:
    async def test_publish_now(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        route = mock_api.post("https://www.wixapis.com/blog/v3/posts").mock(
            return_value=httpx.Response(200, json={"post": {"id": "wix-7", "url": "https://site.wix/p"}})
        )

        adapter = get_adapter("wix", {"accessToken": "raw-token", "blogId": "b"}, http_client)
        result = await adapter.publish(_POST)

        request = route.calls.last.request
        assert request.headers["Authorization"] == "raw-token"
        post = json.loads(request.content)["post"]
        assert (post["status"], post["publishStatus"]) == ("PUBLISHED", "PUBLISHED")
        assert result.external_id == "wix-7"


class TestNotionFlow:
    async def test_page_created(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        route = mock_api.post("https://api.notion.com/v1/pages").mock(
            return_value=httpx.Response(200, json={"id": "page-1", "url": "https://notion.so/page-1"})
        )

        adapter = get_adapter("notion", {"token": "secret_x", "databaseId": "db"}, http_client)
        result = await adapter.publish(_POST)

        body = json.loads(route.calls.last.request.content)
        assert route.calls.last.request.headers["Notion-Version"] == "2022-06-28"
        text = body["children"][-1]["paragraph"]["rich_text"][0]["text"]["content"]
        assert text == "IntroRanking well takes work."
        assert result.url == "https://notion.so/page-1"


class TestFramerFlow:
    async def test_item_created(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        route = mock_api.post("https://api.framer.com/v3/projects/p1/cms/collections/c1/items").mock(
            return_value=httpx.Response(200, json={"item": {"id": "fr-1"}})
        )

        adapter = get_adapter("framer", {"token": "t", "projectId": "p1", "collectionId": "c1"}, http_client)
        result = await adapter.publish(_POST)

        item = json.loads(route.calls.last.request.content)["item"]
        assert item["title"] == _POST.title
        assert "slug" not in item
        assert result.external_id == "fr-1"
        assert result.url is None


# ---------------------------------------------------------------------------
# Webhook
# ---------------------------------------------------------------------------


class TestWebhookFlow:
    async def test_signed_delivery(self, mock_api: respx.MockRouter, http_client: httpx.AsyncClient) -> None:
        route = mock_api.post("https://hooks.example.com/in").mock(return_value=httpx.Response(204))

        adapter = get_adapter("webhook", {"url": "https://hooks.example.com/in", "secret": "s3cret"}, http_client)
        result = await adapter.publish(_POST)

        request = route.calls.last.request
        assert request.headers["X-Signature"] == "s3cret"
        payload = json.loads(request.content)
        assert payload["title"] == _POST.title
        assert payload["idempotencyKey"]
        assert result.external_id == ""
