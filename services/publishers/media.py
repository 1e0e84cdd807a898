"""Featured image uploader for the WordPress family.

Downloads a remote image and re-hosts it as a WordPress media attachment so
the returned id can be referenced by the post.

Failure policy: best-effort. Both upload functions log and return None on any
error; a missing featured image never fails the publish call itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx
import structlog

from core.exceptions import ImageUploadError

if TYPE_CHECKING:
    from .wordpress import WordPressConfig
    from .wpcom import WPComConfig

log = structlog.get_logger()

_DEFAULT_STEM = "header-image"
_DEFAULT_EXTENSION = "jpg"
_DEFAULT_CONTENT_TYPE = "image/jpeg"
_WPCOM_API = "https://public-api.wordpress.com/rest/v1.1"


@dataclass(frozen=True, slots=True)
class RemoteImage:
    content: bytes
    filename: str
    content_type: str


@dataclass(frozen=True, slots=True)
class UploadedImage:
    id: int | str
    source_url: str | None = None


def _extension_from_content_type(content_type: str) -> str:
    """image/png -> png, image/svg+xml -> svg, junk -> jpg."""
    subtype = content_type.split("/", 1)[1] if "/" in content_type else ""
    subtype = subtype.split(";", 1)[0].split("+", 1)[0].strip()
    return subtype or _DEFAULT_EXTENSION


def infer_filename(image_url: str, content_type: str) -> str:
    """Last URL path segment, or header-image.<ext> when it has no extension."""
    path = urlsplit(image_url).path
    segment = next((part for part in reversed(path.split("/")) if part), "")
    if segment and "." in segment:
        return segment
    return f"{_DEFAULT_STEM}.{_extension_from_content_type(content_type)}"


async def download_remote_image(image_url: str, http_client: httpx.AsyncClient) -> RemoteImage:
    """GET the image bytes. Raises ImageUploadError on non-2xx."""
    resp = await http_client.get(image_url, follow_redirects=True)
    if not resp.is_success:
        raise ImageUploadError(f"Failed to download image ({resp.status_code})")

    content_type = resp.headers.get("content-type") or _DEFAULT_CONTENT_TYPE
    return RemoteImage(
        content=resp.content,
        filename=infer_filename(image_url, content_type),
        content_type=content_type.split(";", 1)[0].strip(),
    )


async def upload_featured_image_to_self_hosted(
    config: WordPressConfig,
    image_url: str | None,
    http_client: httpx.AsyncClient,
    alt_text: str | None = None,
) -> UploadedImage | None:
    """Upload to /wp-json/wp/v2/media with Basic auth. None on any failure."""
    if not image_url:
        return None

    try:
        image = await download_remote_image(image_url, http_client)
        data = {"alt_text": alt_text} if alt_text else None
        resp = await http_client.post(
            f"{config.url.rstrip('/')}/wp-json/wp/v2/media",
            auth=httpx.BasicAuth(config.username, config.password),
            files={"file": (image.filename, image.content, image.content_type)},
            data=data,
        )
        if not resp.is_success:
            raise ImageUploadError(f"WordPress media upload failed ({resp.status_code}): {resp.text[:500]}")

        media = resp.json()
        if not isinstance(media, dict) or not media.get("id"):
            raise ImageUploadError("WordPress media response missing id")
        return UploadedImage(id=media["id"], source_url=media.get("source_url"))
    except Exception as exc:
        log.warning("image_upload_failed", target="wordpress", image_url=image_url, error=str(exc))
        return None


def _unwrap_wpcom_media(payload: Any) -> dict[str, Any]:
    """media/new answers either {"media": [{...}]} or a bare media object."""
    if isinstance(payload, dict) and isinstance(payload.get("media"), list):
        return payload["media"][0] if payload["media"] else {}
    return payload if isinstance(payload, dict) else {}


async def upload_featured_image_to_wpcom(
    config: WPComConfig,
    image_url: str | None,
    http_client: httpx.AsyncClient,
    alt_text: str | None = None,
) -> UploadedImage | None:
    """Upload to /sites/{site}/media/new with Bearer auth. None on any failure."""
    if not image_url:
        return None

    try:
        image = await download_remote_image(image_url, http_client)
        data = {"title": alt_text} if alt_text else None
        resp = await http_client.post(
            f"{_WPCOM_API}/sites/{config.site_id}/media/new",
            headers={"Authorization": f"Bearer {config.access_token}"},
            files={"media[]": (image.filename, image.content, image.content_type)},
            data=data,
        )
        if not resp.is_success:
            raise ImageUploadError(f"WordPress.com media upload failed ({resp.status_code}): {resp.text[:500]}")

        media = _unwrap_wpcom_media(resp.json())
        media_id = media.get("ID") or media.get("id")
        if not media_id:
            raise ImageUploadError("WordPress.com media response missing ID")
        return UploadedImage(id=media_id, source_url=media.get("URL") or media.get("source_url"))
    except Exception as exc:
        log.warning("image_upload_failed", target="wpcom", image_url=image_url, error=str(exc))
        return None
