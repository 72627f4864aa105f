"""Deliver rendered emails through the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from .delivery import MailDelivery, SentEmail
from .templates import render_template

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages: list[str] = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            help_link = item.get("help")
            message = str(item["message"])
            messages.append(f"{message} (help: {help_link})" if help_link else message)
        if messages:
            return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_failure(prefix: str, status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("%s with status %s: %s", prefix, status_code, details)
    elif status_code:
        logger.error("%s with status %s", prefix, status_code)
    elif details:
        logger.error("%s: %s", prefix, details)
    else:
        logger.error("%s", prefix)


class SendGridTransport:
    """Transport backed by ``SendGridAPIClient``."""

    def __init__(self, api_key: str | None, sender: str | None) -> None:
        self.api_key = api_key
        self.sender = sender

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.sender)

    def send(self, delivery: MailDelivery) -> SentEmail | None:
        if not self.is_configured:
            logger.info("SendGrid configuration incomplete; skipping email delivery")
            return None

        body = render_template(delivery.template, delivery.variables)
        message = Mail(
            from_email=self.sender,
            to_emails=delivery.recipient,
            subject=delivery.subject,
            html_content=body,
        )

        try:
            client = SendGridAPIClient(self.api_key)
            response = client.send(message)
        except Exception as exc:  # pragma: no cover - network failures depend on environment
            _log_failure(
                "SendGrid API request failed",
                getattr(exc, "status_code", None),
                getattr(exc, "body", None),
            )
            return None

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            _log_failure(
                "SendGrid API responded", status_code, getattr(response, "body", None)
            )
            return None

        return SentEmail(
            recipient=delivery.recipient,
            subject=delivery.subject,
            body=body,
            template=delivery.template,
            variables=dict(delivery.variables),
        )


__all__ = ["SendGridTransport"]
