"""HTML bodies for every template identifier the application sends."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from html import escape
from typing import Any

MANAGE_EMAIL_SUBSCRIPTIONS = "To stop receiving these emails change your settings in"

TEMPLATE_COMMENT = "comment"
TEMPLATE_REPLY = "reply"
TEMPLATE_DIRECT_MESSAGE_RECEIVED = "direct_message_for_receiver"
TEMPLATE_DIRECT_MESSAGE_SENT = "direct_message_for_sender"
TEMPLATE_DIGEST = "proposal_notification_digest"
TEMPLATE_CONFIRMATION = "confirmation_instructions"
TEMPLATE_RESET_PASSWORD = "reset_password_instructions"
TEMPLATE_UNFEASIBLE_SPENDING_PROPOSAL = "unfeasible_spending_proposal"


def _text(value: Any) -> str:
    return escape(str(value)) if value is not None else ""


def _link(url: str, label: str | None = None) -> str:
    return f'<a href="{escape(url, quote=True)}">{_text(label or url)}</a>'


def _greeting(variables: Mapping[str, Any]) -> str:
    name = variables.get("recipient_name")
    return f"<p>Hello {_text(name)},</p>" if name else "<p>Hello,</p>"


def _subscriptions_footer(variables: Mapping[str, Any]) -> str:
    account_url = variables.get("account_url")
    if not account_url:
        return ""
    return (
        f"<p>{_text(MANAGE_EMAIL_SUBSCRIPTIONS)} "
        f"{_link(account_url, 'My account')}.</p>"
    )


def _render_comment(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            f"<p>{_text(variables['author_name'])} has commented on your "
            f"{_text(variables['subject_label'])} "
            f"<strong>{_text(variables['subject_title'])}</strong>.</p>",
            f"<blockquote>{_text(variables['comment_body'])}</blockquote>",
            f"<p>{_link(variables['subject_url'], 'Read the conversation')}</p>",
            _subscriptions_footer(variables),
        )
    )


def _render_reply(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            f"<p>{_text(variables['author_name'])} has responded to your comment.</p>",
            f"<blockquote>{_text(variables['reply_body'])}</blockquote>",
            f"<p>{_link(variables['comment_url'], 'See the answer')}</p>",
            _subscriptions_footer(variables),
        )
    )


def _render_direct_message_received(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            f"<p>{_link(variables['sender_url'], variables['sender_name'])} "
            "has sent you a private message.</p>",
            f"<h2>{_text(variables['title'])}</h2>",
            f"<p>{_text(variables['body'])}</p>",
        )
    )


def _render_direct_message_sent(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            f"<p>Your private message to {_text(variables['receiver_name'])} "
            "has been sent.</p>",
            f"<h2>{_text(variables['title'])}</h2>",
            f"<p>{_text(variables['body'])}</p>",
        )
    )


def _render_digest_group(group: Mapping[str, Any]) -> str:
    items = "".join(
        "<li>"
        f"<h3>{_link(item['notification_url'], item['title'])}</h3>"
        f"<p>{_text(item['body'])}</p>"
        "</li>"
        for item in group["notifications"]
    )
    return "".join(
        (
            "<section>",
            f"<h2>{_text(group['subject_title'])}</h2>",
            f"<p>by {_text(group['subject_author_name'])}</p>",
            f"<ul>{items}</ul>",
            f"<p>{_link(group['comments_url'], 'Reply')} | "
            f"{_link(group['share_url'], 'Share')}</p>",
            "</section>",
        )
    )


def _render_digest(variables: Mapping[str, Any]) -> str:
    groups = "".join(_render_digest_group(group) for group in variables["groups"])
    return "".join(
        (
            _greeting(variables),
            "<p>These are the latest updates on the proposals you support.</p>",
            groups,
            _subscriptions_footer(variables),
        )
    )


def _render_confirmation(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            "<p>You can confirm your account through the link below:</p>",
            f"<p>{_link(variables['confirmation_url'], 'Confirm my account')}</p>",
        )
    )


def _render_reset_password(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            "<p>Someone has requested a link to change your password. "
            "You can do this through the link below.</p>",
            f"<p>{_link(variables['edit_password_url'], 'Change my password')}</p>",
            "<p>If you didn't request this, please ignore this email. "
            "Your password won't change until you create a new one.</p>",
        )
    )


def _render_unfeasible_spending_proposal(variables: Mapping[str, Any]) -> str:
    return "".join(
        (
            _greeting(variables),
            f"<p>Your investment project <strong>{_text(variables['title'])}</strong> "
            f"(code {_text(variables['code'])}) has been marked as unfeasible.</p>",
            f"<blockquote>{_text(variables['explanation'])}</blockquote>",
        )
    )


_RENDERERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    TEMPLATE_COMMENT: _render_comment,
    TEMPLATE_REPLY: _render_reply,
    TEMPLATE_DIRECT_MESSAGE_RECEIVED: _render_direct_message_received,
    TEMPLATE_DIRECT_MESSAGE_SENT: _render_direct_message_sent,
    TEMPLATE_DIGEST: _render_digest,
    TEMPLATE_CONFIRMATION: _render_confirmation,
    TEMPLATE_RESET_PASSWORD: _render_reset_password,
    TEMPLATE_UNFEASIBLE_SPENDING_PROPOSAL: _render_unfeasible_spending_proposal,
}


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """Return the HTML body for ``template`` filled with ``variables``."""

    renderer = _RENDERERS.get(template)
    if renderer is None:
        msg = f"Unknown email template '{template}'"
        raise ValueError(msg)
    return renderer(variables)


__all__ = [
    "MANAGE_EMAIL_SUBSCRIPTIONS",
    "TEMPLATE_COMMENT",
    "TEMPLATE_CONFIRMATION",
    "TEMPLATE_DIGEST",
    "TEMPLATE_DIRECT_MESSAGE_RECEIVED",
    "TEMPLATE_DIRECT_MESSAGE_SENT",
    "TEMPLATE_REPLY",
    "TEMPLATE_RESET_PASSWORD",
    "TEMPLATE_UNFEASIBLE_SPENDING_PROPOSAL",
    "render_template",
]
