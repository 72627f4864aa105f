"""Domain entities that can receive comments and announcements."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

COMMENTABLE_PROPOSAL = "proposal"
COMMENTABLE_DEBATE = "debate"


@dataclass
class Commentable:
    """Common attributes of proposals and debates.

    ``kind`` identifies the concrete type in polymorphic columns and
    ``label`` is the human readable name used in email subjects.
    """

    id: int | None
    title: str
    author_id: int | None
    description: str = ""
    created_at: datetime | None = None

    kind: ClassVar[str] = ""
    label: ClassVar[str] = ""


@dataclass
class Proposal(Commentable):
    """Citizen proposal that users can support with their vote."""

    kind: ClassVar[str] = COMMENTABLE_PROPOSAL
    label: ClassVar[str] = "citizen proposal"


@dataclass
class Debate(Commentable):
    """Open debate thread."""

    kind: ClassVar[str] = COMMENTABLE_DEBATE
    label: ClassVar[str] = "debate"


COMMENTABLE_TYPES: dict[str, type[Commentable]] = {
    Proposal.kind: Proposal,
    Debate.kind: Debate,
}


__all__ = [
    "COMMENTABLE_DEBATE",
    "COMMENTABLE_PROPOSAL",
    "COMMENTABLE_TYPES",
    "Commentable",
    "Debate",
    "Proposal",
]
