"""Shared pieces of the domain models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Timezone-aware now; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Immutable record. Changes produce a new copy via ``model_copy``."""

    model_config = ConfigDict(frozen=True)
