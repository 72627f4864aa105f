"""Schemas for digest runs."""

from pydantic import BaseModel, ConfigDict, Field


class DigestRunRequest(BaseModel):
    max_workers: int | None = Field(default=None, ge=1, le=32)
    expire_stale: bool = Field(
        default=False, description="Expire pending entries past retention before sending"
    )


class DigestRunRead(BaseModel):
    sent: int
    skipped: int
    failed: int
    conflicts: int
    expired: int = 0

    model_config = ConfigDict(from_attributes=True)


__all__ = ["DigestRunRead", "DigestRunRequest"]
