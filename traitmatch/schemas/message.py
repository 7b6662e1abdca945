from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4
from pydantic import Field

from traitmatch.schemas.common import CamelModel
from traitmatch.schemas.user import ProfileSchema


class MessageStatus(str, Enum):
    """Message status enum."""
    SENT = "SENT"
    READ = "READ"
    REPLIED = "REPLIED"


class MessageSchema(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    from_id: str = Field(..., min_length=1, description="User id or company id of the sender")
    to_id: str = Field(..., min_length=1, description="User id or company id of the recipient")
    job_id: Optional[str] = Field(None, description="Set when the message is about a specific job")
    content: str
    is_anonymous: bool = False
    sender_name: Optional[str] = Field(None, description="Only kept when the message is not anonymous")
    sender_profile: Optional[ProfileSchema] = Field(None, description="Only kept when the message is not anonymous")
    is_from_company: bool = False
    thread_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: MessageStatus = MessageStatus.SENT


class MessageStatusUpdate(CamelModel):
    status: MessageStatus


class StatusOut(CamelModel):
    status: str
