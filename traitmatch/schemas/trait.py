from datetime import datetime
from enum import Enum
from typing import Dict, List
from pydantic import Field

from traitmatch.schemas.common import CamelModel


class TraitCategory(str, Enum):
    COGNITIVE = "COGNITIVE"          # Mental processing and thinking styles
    SOCIAL = "SOCIAL"                # Interpersonal and communication
    ENVIRONMENTAL = "ENVIRONMENTAL"  # Workspace and physical environment
    WORK_STYLE = "WORK_STYLE"        # Work preferences and approaches
    EMOTIONAL = "EMOTIONAL"          # Emotional processing and regulation


class TraitSchema(CamelModel):
    id: str
    name: str
    description: str
    category: TraitCategory
    is_active: bool = True
    min_value: int = 1
    max_value: int = 10
    examples: List[str] = Field(default_factory=list)


class TraitLibrarySchema(CamelModel):
    traits: List[TraitSchema]
    version: str
    last_updated: datetime


class TraitValidationResponse(CamelModel):
    """
    Result of checking a trait map against the library.
    errors maps trait id to a human readable problem.
    """
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
