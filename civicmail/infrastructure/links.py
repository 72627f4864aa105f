"""Build absolute or relative links to platform pages."""

from __future__ import annotations

import urllib.parse
from functools import lru_cache

from civicmail.config import get_settings
from civicmail.domain.notifiables import EntityRef

_COLLECTIONS: dict[str, str] = {
    "proposal": "proposals",
    "debate": "debates",
    "comment": "comments",
    "user": "users",
    "notification": "notifications",
    "spending_proposal": "spending_proposals",
}


class LinkBuilder:
    """Turn entity references into URLs under ``base_url``."""

    def __init__(self, base_url: str = "") -> None:
        self.base_url = base_url.rstrip("/")

    def link_to(self, ref: EntityRef, anchor: str | None = None) -> str:
        collection = _COLLECTIONS.get(ref.kind)
        if collection is None:
            msg = f"No route for entity kind '{ref.kind}'"
            raise ValueError(msg)
        return self._url(f"/{collection}/{ref.id}", anchor=anchor)

    def account(self) -> str:
        return self._url("/account")

    def user_confirmation(self, token: str) -> str:
        return self._url("/users/confirmation", query={"confirmation_token": token})

    def edit_password(self, token: str) -> str:
        return self._url("/users/password/edit", query={"reset_password_token": token})

    def _url(
        self,
        path: str,
        *,
        anchor: str | None = None,
        query: dict[str, str] | None = None,
    ) -> str:
        url = f"{self.base_url}{path}"
        if query:
            url = f"{url}?{urllib.parse.urlencode(query)}"
        if anchor:
            url = f"{url}#{anchor}"
        return url


@lru_cache
def get_link_builder() -> LinkBuilder:
    return LinkBuilder(get_settings().base_url)


__all__ = ["LinkBuilder", "get_link_builder"]
