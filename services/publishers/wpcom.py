"""WordPress.com adapter — REST API v1.1, OAuth2 Bearer.

WordPress.com can answer posts/new with 200 while storing a truncated copy of
the content. publish() therefore verifies every created post and, when it is
short, deletes it and tries again:

    upload image (once) -> [create -> wait 2s -> verify -> delete if short] x3

Backoff between attempts: 2^attempt seconds (2s, 4s).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from core.exceptions import ContentTruncatedError, PublishError
from services.backoff import backoff_delay

from .base import PublishInput, PublishResult, api_request, require_id
from .media import upload_featured_image_to_wpcom

log = structlog.get_logger()

_PROVIDER = "WP.com"
_API_BASE = "https://public-api.wordpress.com/rest/v1.1"

_MAX_ATTEMPTS = 3
_VERIFY_DELAY = 2.0  # seconds between create and verify
_BACKOFF_BASE = 1.0
# Published content may be this much shorter than submitted (entity encoding)
_MIN_CONTENT_RATIO = 0.95


@dataclass(frozen=True, slots=True)
class WPComConfig:
    access_token: str
    site_id: str


def _completeness(published: int, expected: int) -> int:
    """Published length as a rounded percentage of the submitted length."""
    if expected <= 0:
        return 100
    return round(published / expected * 100)


class WPComAdapter:
    """WordPress.com hosted sites via public-api.wordpress.com."""

    provider = _PROVIDER
    supports_scheduling = True
    supports_images = True
    supports_tags = True

    def __init__(self, config: WPComConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = http_client

    @property
    def site_url(self) -> str:
        return f"{_API_BASE}/sites/{self._config.site_id}"

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        return await api_request(
            self._client,
            _PROVIDER,
            method,
            f"{self.site_url}{path}",
            headers={"Authorization": f"Bearer {self._config.access_token}"},
            **kwargs,
        )

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    async def test_connection(self) -> bool:
        try:
            await self._api("GET", "")
            return True
        except PublishError as exc:
            log.warning("wpcom_validate_failed", site_id=self._config.site_id, status=exc.status_code)
            return False

    async def publish(self, input: PublishInput) -> PublishResult:
        payload: dict[str, Any] = {
            "title": input.title,
            "content": input.html,
            "status": "future" if input.when else "publish",
        }
        if input.excerpt is not None:
            payload["excerpt"] = input.excerpt
        if input.when:
            payload["date"] = input.when
        if input.tags:
            payload["tags"] = list(input.tags)

        image = await upload_featured_image_to_wpcom(
            self._config,
            input.image_url,
            self._client,
            alt_text=input.title,
        )
        if image is not None:
            payload["featured_image"] = image.id

        expected_length = len(input.html)
        last_error = PublishError("WordPress.com publish was not attempted", provider=_PROVIDER)

        for attempt in range(1, _MAX_ATTEMPTS + 1):
            log.info("wpcom_publish_attempt", attempt=attempt, max_attempts=_MAX_ATTEMPTS)
            try:
                return await self._publish_and_verify(payload, expected_length)
            except PublishError as exc:
                last_error = exc
                log.warning(
                    "wpcom_publish_attempt_failed",
                    attempt=attempt,
                    max_attempts=_MAX_ATTEMPTS,
                    error=str(exc),
                )

            if attempt < _MAX_ATTEMPTS:
                delay = backoff_delay(attempt, base=_BACKOFF_BASE)
                log.info("wpcom_publish_backoff", attempt=attempt, delay_s=delay)
                await asyncio.sleep(delay)

        message = f"Failed to publish to WordPress.com after {_MAX_ATTEMPTS} attempts. Last error: {last_error}"
        log.error("wpcom_publish_failed", attempts=_MAX_ATTEMPTS, error=str(last_error))
        raise PublishError(
            message,
            provider=_PROVIDER,
            status_code=last_error.status_code,
            body=last_error.body,
        ) from last_error

    async def _publish_and_verify(self, payload: dict[str, Any], expected_length: int) -> PublishResult:
        """One attempt: create, wait, verify. Raises ContentTruncatedError when short."""
        post = await self._api("POST", "/posts/new", json=payload)
        post_id = require_id(_PROVIDER, post.get("ID"))

        await asyncio.sleep(_VERIFY_DELAY)

        published_length = await self._published_length(post_id, fallback=expected_length)
        if published_length < expected_length * _MIN_CONTENT_RATIO:
            completeness = _completeness(published_length, expected_length)
            log.error(
                "wpcom_content_truncated",
                post_id=post_id,
                published=published_length,
                expected=expected_length,
                completeness=completeness,
            )
            await self.delete_post(post_id)
            raise ContentTruncatedError(
                f"Content was truncated by WordPress.com (published {completeness}% of expected length)",
                provider=_PROVIDER,
                completeness=completeness,
            )

        log.info("wpcom_published", post_id=post_id, published=published_length, expected=expected_length)
        return PublishResult(external_id=post_id, url=post.get("URL"))

    async def _published_length(self, post_id: str, *, fallback: int) -> int:
        """Length of the stored content. A failed fetch is not a truncation."""
        try:
            post = await self._api("GET", f"/posts/{post_id}", params={"context": "edit"})
        except PublishError as exc:
            log.warning("wpcom_verify_failed", post_id=post_id, error=str(exc))
            return fallback
        return len(post.get("content") or "")

    async def delete_post(self, post_id: str) -> bool:
        """POST /posts/{id}/delete. Returns True on success."""
        try:
            await self._api("POST", f"/posts/{post_id}/delete")
            log.info("wpcom_post_deleted", post_id=post_id)
            return True
        except PublishError as exc:
            log.error("wpcom_delete_failed", post_id=post_id, error=str(exc))
            return False
