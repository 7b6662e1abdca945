from datetime import datetime, timezone
from typing import Dict
from uuid import uuid4
from pydantic import Field

from traitmatch.schemas.common import CamelModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobSchema(CamelModel):
    """
    A job posting owned by a company.
    Traits listed here override the owning company's traits with the same key.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    company_id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    traits: Dict[str, int] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
