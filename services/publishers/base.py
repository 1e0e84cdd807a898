"""Publisher contract and data models shared by every platform adapter.

Adapters do not inherit from a common class: each one is an independent class
that structurally satisfies PublisherAdapter. The only shared code is the
api_request() helper that enforces the common error format:

    "{provider} error {status}: {body}"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx
import structlog

from core.exceptions import PublishError

log = structlog.get_logger()

# Response bodies embedded in error messages are cut to this size
_ERROR_BODY_LIMIT = 2000


@dataclass(frozen=True, slots=True)
class PublishInput:
    """Platform-agnostic post to publish."""

    title: str
    html: str
    excerpt: str | None = None
    tags: list[str] = field(default_factory=list)
    image_url: str | None = None
    slug: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    when: str | None = None  # ISO datetime; set = schedule instead of publish now

    def to_payload(self) -> dict[str, Any]:
        """camelCase JSON form (webhook wire format). Unset fields are dropped."""
        payload: dict[str, Any] = {
            "title": self.title,
            "html": self.html,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
            "imageUrl": self.image_url,
            "slug": self.slug,
            "metadata": dict(self.metadata),
            "when": self.when,
        }
        return {k: v for k, v in payload.items() if v is not None}


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Normalized identifier of the created post."""

    external_id: str
    url: str | None = None


@runtime_checkable
class PublisherAdapter(Protocol):
    """Contract every platform adapter implements."""

    provider: str
    supports_scheduling: bool
    supports_images: bool
    supports_tags: bool

    async def test_connection(self) -> bool:
        """Read-only credential check. Returns False instead of raising."""
        ...

    async def publish(self, input: PublishInput) -> PublishResult:
        """Create the post. Raises PublishError on failure."""
        ...


async def send_request(
    client: httpx.AsyncClient,
    provider: str,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request. Any failure before a response arrives becomes PublishError.

    Covers transport errors and requests that cannot be built from stored
    config: malformed URLs, non-ASCII header values, non-string headers.
    """
    try:
        return await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise PublishError(f"{provider} error: {exc}", provider=provider) from exc
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        # UnicodeEncodeError from header encoding is a ValueError
        raise PublishError(f"{provider} error: invalid request: {exc}", provider=provider) from exc


async def api_request(
    client: httpx.AsyncClient,
    provider: str,
    method: str,
    url: str,
    **kwargs: Any,
) -> Any:
    """Send one request and return the decoded JSON body.

    Raises PublishError for transport errors, unbuildable requests and
    non-2xx responses. An empty or non-JSON 2xx body decodes to an empty dict.
    """
    resp = await send_request(client, provider, method, url, **kwargs)

    if not resp.is_success:
        body = resp.text[:_ERROR_BODY_LIMIT]
        raise PublishError(
            f"{provider} error {resp.status_code}: {body}",
            provider=provider,
            status_code=resp.status_code,
            body=body,
        )

    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError:
        log.warning("publisher_non_json_response", provider=provider, url=url)
        return {}


def require_id(provider: str, value: Any) -> str:
    """Stringify a created-object id, raising when the platform omitted it."""
    if value is None or value == "":
        raise PublishError(f"{provider} error: response did not include an id", provider=provider)
    return str(value)
