"""
Trait matching module.

Pure scoring, filtering and ranking of (job, company) pairs against a
candidate trait profile, with an explainable variant for debugging.
"""

from traitmatch.libs.matching.engine import (
    SCORE_THRESHOLD,
    find_matches,
    find_matches_with_diagnostics,
    passes_threshold,
    similarity_from_distance,
)
from traitmatch.libs.matching.exceptions import (
    CatalogUnavailableError,
    InvalidMatchInputError,
    MatchEngineError,
)
from traitmatch.libs.matching.models import (
    CompanyLike,
    JobDiagnostic,
    JobStatus,
    JobLike,
    MatchDiagnostics,
    MatchReport,
    MatchResult,
    TraitComparison,
    TraitCoverage,
)
from traitmatch.libs.matching.traits import effective_traits

__all__ = [
    'SCORE_THRESHOLD',
    'find_matches',
    'find_matches_with_diagnostics',
    'passes_threshold',
    'similarity_from_distance',
    'effective_traits',
    'MatchEngineError',
    'InvalidMatchInputError',
    'CatalogUnavailableError',
    'CompanyLike',
    'JobDiagnostic',
    'JobLike',
    'JobStatus',
    'MatchDiagnostics',
    'MatchReport',
    'MatchResult',
    'TraitComparison',
    'TraitCoverage',
]
