"""Platform publishers — WordPress, WordPress.com, Webflow, Shopify, Wix, Notion, Framer, webhooks."""

from .base import PublisherAdapter, PublishInput, PublishResult
from .factory import SUPPORTED_PROVIDERS, get_adapter
from .framer import FramerAdapter, FramerConfig
from .media import (
    UploadedImage,
    upload_featured_image_to_self_hosted,
    upload_featured_image_to_wpcom,
)
from .notion import NotionAdapter, NotionConfig
from .shopify import ShopifyAdapter, ShopifyConfig
from .webflow import WebflowAdapter, WebflowConfig
from .webhook import WebhookAdapter, WebhookConfig
from .wix import WixAdapter, WixConfig
from .wordpress import WordPressAdapter, WordPressConfig
from .wpcom import WPComAdapter, WPComConfig

__all__ = [
    "SUPPORTED_PROVIDERS",
    "FramerAdapter",
    "FramerConfig",
    "NotionAdapter",
    "NotionConfig",
    "PublishInput",
    "PublishResult",
    "PublisherAdapter",
    "ShopifyAdapter",
    "ShopifyConfig",
    "UploadedImage",
    "WPComAdapter",
    "WPComConfig",
    "WebflowAdapter",
    "WebflowConfig",
    "WebhookAdapter",
    "WebhookConfig",
    "WixAdapter",
    "WixConfig",
    "WordPressAdapter",
    "WordPressConfig",
    "get_adapter",
    "upload_featured_image_to_self_hosted",
    "upload_featured_image_to_wpcom",
]
