"""Send the pending notification digests once."""

from __future__ import annotations

import argparse
import logging

import anyio
from sqlalchemy.exc import SQLAlchemyError

from civicmail.application.use_cases import expire_stale_notifications, run_digest_async
from civicmail.config import get_settings
from civicmail.infrastructure.database import SessionLocal, initialize_database
from civicmail.infrastructure.mail import get_mailer


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the digest run."""

    parser = argparse.ArgumentParser(
        description="Email every user the digest of their pending notifications.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Recipients processed concurrently (default: DIGEST_MAX_WORKERS)",
    )
    parser.add_argument(
        "--expire",
        action="store_true",
        help="Expire pending notifications past the retention window before sending.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every recipient processed.",
    )
    return parser.parse_args()


def main() -> None:
    """Run the digest using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.workers is not None and args.workers < 1:
        raise SystemExit("--workers must be at least 1")

    initialize_database()

    expired = 0
    if args.expire:
        session = SessionLocal()
        try:
            expired = expire_stale_notifications(session)
        except SQLAlchemyError as exc:
            session.rollback()
            raise SystemExit(f"Could not expire stale notifications: {exc}") from exc
        finally:
            session.close()

    summary = anyio.run(
        lambda: run_digest_async(SessionLocal, get_mailer(), max_workers=args.workers)
    )
    print(
        f"Digest run for {get_settings().app_name} finished:\n"
        f"  Sent: {summary.sent}\n"
        f"  Skipped: {summary.skipped}\n"
        f"  Failed: {summary.failed}\n"
        f"  Conflicts: {summary.conflicts}\n"
        f"  Expired: {expired}"
    )
    if summary.failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
