"""Endpoint that triggers a digest run."""

import anyio.to_thread
from fastapi import APIRouter, Depends

from civicmail.application.use_cases import expire_stale_notifications, run_digest_async
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.interfaces.api.dependencies import (
    get_link_builder,
    get_mailer,
    get_session_factory,
)
from civicmail.interfaces.api.schemas import DigestRunRead, DigestRunRequest

router = APIRouter(prefix="/digests", tags=["digests"])


def _expire_stale(session_factory) -> int:
    session = session_factory()
    try:
        return expire_stale_notifications(session)
    finally:
        session.close()


@router.post("/run", response_model=DigestRunRead)
async def run_digest(
    run_in: DigestRunRequest | None = None,
    mailer: Mailer = Depends(get_mailer),
    links: LinkBuilder = Depends(get_link_builder),
    session_factory=Depends(get_session_factory),
):
    """Send every pending digest and report how the run went."""

    run_in = run_in or DigestRunRequest()
    expired = 0
    if run_in.expire_stale:
        expired = await anyio.to_thread.run_sync(_expire_stale, session_factory)
    summary = await run_digest_async(
        session_factory,
        mailer,
        max_workers=run_in.max_workers,
        links=links,
    )
    return DigestRunRead(
        sent=summary.sent,
        skipped=summary.skipped,
        failed=summary.failed,
        conflicts=summary.conflicts,
        expired=expired,
    )
