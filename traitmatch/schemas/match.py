from typing import Dict, List, Optional
from pydantic import Field

from traitmatch.libs.matching.models import JobStatus
from traitmatch.schemas.common import CamelModel
from traitmatch.schemas.company import CompanySchema
from traitmatch.schemas.job import JobSchema


class MatchRequest(CamelModel):
    """Profile to match, e.g. {"traits": {"deep_focus": 8}}."""
    traits: Dict[str, int]


class MatchResultSchema(CamelModel):
    job: JobSchema
    company: CompanySchema
    score: float = Field(..., gt=0.0, le=1.0)


class TraitComparisonSchema(CamelModel):
    trait: str
    user_value: int
    job_value: int
    difference: int


class JobDiagnosticSchema(CamelModel):
    job_id: str
    job_title: str
    company_id: str
    status: JobStatus
    common_traits: List[str] = Field(default_factory=list)
    comparisons: List[TraitComparisonSchema] = Field(default_factory=list)
    sum_of_squares: Optional[float] = None
    score: Optional[float] = None
    above_threshold: bool = False


class TraitCoverageSchema(CamelModel):
    user_value: int
    jobs_with_trait: int
    average_job_value: Optional[float] = None
    min_job_value: Optional[int] = None
    max_job_value: Optional[int] = None
    suggestion: Optional[str] = None


class MatchDiagnosticsSchema(CamelModel):
    total_jobs_analyzed: int
    matches_before_threshold: int
    matches_after_threshold: int
    max_score: Optional[float] = None
    threshold: float
    jobs: List[JobDiagnosticSchema] = Field(default_factory=list)
    trait_coverage: Dict[str, TraitCoverageSchema] = Field(default_factory=dict)
    feedback: List[str] = Field(default_factory=list)


class MatchReportSchema(CamelModel):
    """
    Response model for the debug match endpoint.
    Matches are identical to what POST /match returns for the same profile.
    """
    matches: List[MatchResultSchema]
    diagnostics: MatchDiagnosticsSchema
