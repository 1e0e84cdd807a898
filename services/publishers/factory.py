"""Adapter factory: provider string + stored integration config -> adapter.

Each branch copies only the keys its adapter understands (explicit allow-list),
so extra or misnamed keys in a stored config are ignored. Keys are accepted in
the dashboard's camelCase and in snake_case.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from core.config import get_settings
from core.exceptions import ConnectionValidationError, UnknownProviderError

from .base import PublisherAdapter
from .framer import FramerAdapter, FramerConfig
from .notion import NotionAdapter, NotionConfig
from .shopify import ShopifyAdapter, ShopifyConfig
from .webflow import WebflowAdapter, WebflowConfig
from .webhook import WebhookAdapter, WebhookConfig
from .wix import WixAdapter, WixConfig
from .wordpress import WordPressAdapter, WordPressConfig
from .wpcom import WPComAdapter, WPComConfig

SUPPORTED_PROVIDERS = ("wordpress", "wpcom", "webflow", "notion", "shopify", "wix", "framer", "webhook")


def _get(config: Mapping[str, Any], camel: str, default: Any = "") -> Any:
    """Read camelCase key, falling back to its snake_case spelling."""
    snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in camel)
    value = config.get(camel)
    if value is None:
        value = config.get(snake)
    return default if value is None else value


def _blog_id(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConnectionValidationError(f"Shopify blogId must be an integer, got {value!r}") from None


def get_adapter(provider: str, config: Mapping[str, Any], http_client: httpx.AsyncClient) -> PublisherAdapter:
    """Construct the adapter for provider. Raises UnknownProviderError before any I/O."""
    match provider:
        case "wordpress":
            return WordPressAdapter(
                WordPressConfig(
                    url=_get(config, "url"),
                    username=_get(config, "username"),
                    password=_get(config, "password"),
                    post_type=_get(config, "postType") or "posts",
                ),
                http_client,
            )
        case "wpcom":
            return WPComAdapter(
                WPComConfig(access_token=_get(config, "accessToken"), site_id=str(_get(config, "siteId"))),
                http_client,
            )
        case "webflow":
            return WebflowAdapter(
                WebflowConfig(
                    token=_get(config, "token"),
                    site_id=_get(config, "siteId"),
                    collection_id=_get(config, "collectionId"),
                ),
                http_client,
            )
        case "notion":
            return NotionAdapter(
                NotionConfig(token=_get(config, "token"), database_id=_get(config, "databaseId")),
                http_client,
            )
        case "shopify":
            return ShopifyAdapter(
                ShopifyConfig(
                    store_domain=_get(config, "storeDomain"),
                    access_token=_get(config, "accessToken"),
                    blog_id=_blog_id(_get(config, "blogId", None)),
                    api_version=_get(config, "apiVersion") or get_settings().shopify_api_version,
                ),
                http_client,
            )
        case "wix":
            return WixAdapter(
                WixConfig(access_token=_get(config, "accessToken"), blog_id=_get(config, "blogId")),
                http_client,
            )
        case "framer":
            return FramerAdapter(
                FramerConfig(
                    token=_get(config, "token"),
                    project_id=_get(config, "projectId"),
                    collection_id=_get(config, "collectionId"),
                ),
                http_client,
            )
        case "webhook":
            return WebhookAdapter(
                WebhookConfig(
                    url=_get(config, "url"),
                    secret=_get(config, "secret", None) or None,
                    headers=dict(_get(config, "headers", None) or {}),
                    signing="hmac" if _get(config, "signing") == "hmac" else "raw",
                ),
                http_client,
            )
        case _:
            raise UnknownProviderError(provider)
