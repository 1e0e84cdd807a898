"""Publishing-job dispatcher.

Runs due jobs one by one through get_adapter(...).publish(). A failed job goes
back to the queue with run_at pushed out by min(60, 2^attempts) minutes.
Jobs are returned as updated copies; storing them is the caller's job.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import structlog

from core.exceptions import AppError
from db.models import Integration, PublishingJob
from services.backoff import backoff_delay
from services.publishers import PublishInput, get_adapter

log = structlog.get_logger()

_DEFAULT_LIMIT = 5
_MAX_BACKOFF_MINUTES = 60.0

IntegrationLoader = Callable[[str], Awaitable[Integration | None]]


@dataclass
class DispatchReport:
    processed: int = 0
    failed: int = 0
    jobs: list[PublishingJob] = field(default_factory=list)


def publish_input_from_payload(payload: dict[str, Any]) -> PublishInput:
    """Build PublishInput from a stored camelCase payload. Unknown keys are ignored."""
    return PublishInput(
        title=payload.get("title") or "",
        html=payload.get("html") or "",
        excerpt=payload.get("excerpt"),
        tags=list(payload.get("tags") or []),
        image_url=payload.get("imageUrl"),
        slug=payload.get("slug"),
        metadata=dict(payload.get("metadata") or {}),
        when=payload.get("when"),
    )


def next_run_at(attempts: int, now: datetime) -> datetime:
    """When a job that has failed `attempts` times may run again."""
    minutes = backoff_delay(attempts, base=1.0, cap=_MAX_BACKOFF_MINUTES)
    return now + timedelta(minutes=minutes)


def due_jobs(jobs: Iterable[PublishingJob], now: datetime, limit: int = _DEFAULT_LIMIT) -> list[PublishingJob]:
    """Queued jobs whose run_at has passed, oldest first, at most limit."""
    ready = [job for job in jobs if job.status == "queued" and job.run_at <= now]
    return sorted(ready, key=lambda job: job.run_at)[:limit]


async def dispatch_job(
    job: PublishingJob,
    load_integration: IntegrationLoader,
    http_client: httpx.AsyncClient,
    now: datetime,
) -> PublishingJob:
    """Publish one job and return the updated copy.

    Never raises: any failure, including a broken integration loader or
    malformed stored config, re-queues this job without touching the others.
    """
    try:
        integration = await load_integration(job.integration_id)
        if integration is None:
            raise AppError(f"Integration not found: {job.integration_id}")

        adapter = get_adapter(integration.provider, integration.config, http_client)
        result = await adapter.publish(publish_input_from_payload(job.payload))
    except Exception as exc:
        attempts = job.attempts + 1
        retry_at = next_run_at(attempts, now)
        log.warning(
            "publishing_job_failed",
            job_id=job.id,
            integration_id=job.integration_id,
            attempts=attempts,
            retry_at=retry_at.isoformat(),
            error=str(exc),
            exc_info=True,
        )
        return job.model_copy(
            update={
                "status": "queued",
                "attempts": attempts,
                "run_at": retry_at,
                "last_error": str(exc) or "Unknown error",
            }
        )

    log.info("publishing_job_succeeded", job_id=job.id, external_id=result.external_id)
    return job.model_copy(
        update={"status": "succeeded", "external_id": result.external_id, "url": result.url, "last_error": None}
    )


async def dispatch_due_jobs(
    jobs: Iterable[PublishingJob],
    load_integration: IntegrationLoader,
    http_client: httpx.AsyncClient,
    *,
    now: datetime | None = None,
    limit: int = _DEFAULT_LIMIT,
) -> DispatchReport:
    """Run up to limit due jobs sequentially and report their new state."""
    now = now or datetime.now(UTC)
    report = DispatchReport()
    for job in due_jobs(jobs, now, limit):
        updated = await dispatch_job(job, load_integration, http_client, now)
        report.jobs.append(updated)
        if updated.status == "succeeded":
            report.processed += 1
        else:
            report.failed += 1
    log.info("publishing_dispatch_done", processed=report.processed, failed=report.failed)
    return report
