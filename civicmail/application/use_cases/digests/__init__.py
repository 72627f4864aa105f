"""Digest aggregation of pending notifications."""

from .aggregator import (
    DigestOutcome,
    DigestRunSummary,
    EmailDigest,
    deliver_user_digest,
    run_digest,
    run_digest_async,
)
from .retention import expire_stale_notifications

__all__ = [
    "DigestOutcome",
    "DigestRunSummary",
    "EmailDigest",
    "deliver_user_digest",
    "expire_stale_notifications",
    "run_digest",
    "run_digest_async",
]
