from typing import Dict, Optional
from uuid import uuid4
from pydantic import Field

from traitmatch.schemas.common import CamelModel


class ProfileSchema(CamelModel):
    """Trait set describing a candidate's preferences and needs."""
    traits: Dict[str, int]


class UserSchema(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    email: str
    profile: ProfileSchema = Field(default_factory=lambda: ProfileSchema(traits={}))


class UserLoginResponse(CamelModel):
    success: bool
    user: Optional[UserSchema] = None
    message: Optional[str] = None
