from typing import Dict, Optional
from pydantic import Field

from traitmatch.schemas.common import CamelModel


class CompanySchema(CamelModel):
    """A hiring company and its baseline workplace traits."""
    id: str = Field(..., min_length=1)
    name: str
    email: str = ""
    traits: Dict[str, int] = Field(default_factory=dict)


class CompanyLoginResponse(CamelModel):
    success: bool
    company: Optional[CompanySchema] = None
    message: Optional[str] = None
