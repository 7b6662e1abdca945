"""
Models for trait matching.

This module contains the data models produced and consumed by the match engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Protocol


class CompanyLike(Protocol):
    """Anything carrying a company identity and a baseline trait set."""
    id: str
    traits: Mapping[str, int]


class JobLike(Protocol):
    """Anything carrying a job identity, its owning company and job-specific traits."""
    id: str
    company_id: str
    title: str
    traits: Mapping[str, int]


class JobStatus(str, Enum):
    """Outcome of considering one job for a profile."""
    NO_COMPANY_FOUND = "no_company_found"
    NO_COMMON_TRAITS = "no_common_traits"
    SCORED = "scored"


@dataclass
class MatchResult:
    """A scored (job, company) pair. Never persisted."""

    job: JobLike
    company: CompanyLike
    score: float


@dataclass
class TraitComparison:
    trait: str
    user_value: int
    job_value: int
    difference: int


@dataclass
class JobDiagnostic:
    """Why a single job did or did not make it into the results."""

    job_id: str
    job_title: str
    company_id: str
    status: JobStatus
    common_traits: List[str] = field(default_factory=list)
    comparisons: List[TraitComparison] = field(default_factory=list)
    sum_of_squares: Optional[float] = None
    score: Optional[float] = None
    above_threshold: bool = False


@dataclass
class TraitCoverage:
    """How the catalog covers one trait of the profile."""

    user_value: int
    jobs_with_trait: int
    average_job_value: Optional[float] = None
    min_job_value: Optional[int] = None
    max_job_value: Optional[int] = None
    suggestion: Optional[str] = None


@dataclass
class MatchDiagnostics:
    total_jobs_analyzed: int
    matches_before_threshold: int
    matches_after_threshold: int
    max_score: Optional[float]
    threshold: float
    jobs: List[JobDiagnostic] = field(default_factory=list)
    trait_coverage: Dict[str, TraitCoverage] = field(default_factory=dict)
    feedback: List[str] = field(default_factory=list)


@dataclass
class MatchReport:
    """Ranked matches together with the diagnostics that produced them."""

    matches: List[MatchResult]
    diagnostics: MatchDiagnostics
