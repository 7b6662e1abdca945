"""
Core trait matching logic.

Scores a candidate profile against (job, company) pairs using the Euclidean
distance over the traits both sides declare. The engine is a pure function of
its inputs: it performs no I/O, keeps no state and does not log.
"""

import math
from dataclasses import dataclass, field
from statistics import mean
from typing import Dict, List, Mapping, Optional, Sequence

from traitmatch.libs.matching.exceptions import InvalidMatchInputError
from traitmatch.libs.matching.models import (
    CompanyLike,
    JobLike,
    JobDiagnostic,
    JobStatus,
    MatchDiagnostics,
    MatchReport,
    MatchResult,
    TraitComparison,
    TraitCoverage,
)
from traitmatch.libs.matching.traits import (
    TraitSet,
    common_traits,
    effective_traits,
    sum_of_squares,
)

# Results must score strictly above this to be returned
SCORE_THRESHOLD = 0.15

# Coverage suggestions kick in when the profile sits this far from the job average
COVERAGE_GAP = 3.0


def similarity_from_distance(distance: float) -> float:
    """Map a distance in [0, inf) to a score in (0, 1]; 0 maps to 1.0."""
    return 1.0 / (1.0 + distance)


def passes_threshold(score: float) -> bool:
    return score > SCORE_THRESHOLD


@dataclass
class _Evaluation:
    job: JobLike
    company: Optional[CompanyLike]
    status: JobStatus
    effective: Dict[str, int] = field(default_factory=dict)
    common: List[str] = field(default_factory=list)
    sum_of_squares: Optional[float] = None
    score: Optional[float] = None


def _check_inputs(
    profile: TraitSet,
    jobs: Sequence[JobLike],
    companies_by_id: Mapping[str, CompanyLike],
) -> None:
    if profile is None:
        raise InvalidMatchInputError("profile trait set is required")
    if not isinstance(profile, Mapping):
        raise InvalidMatchInputError(
            f"profile trait set must be a mapping, got {type(profile).__name__}"
        )
    if jobs is None:
        raise InvalidMatchInputError("jobs sequence is required")
    if companies_by_id is None:
        raise InvalidMatchInputError("company lookup is required")
    for job in jobs:
        if getattr(job, "traits", None) is None:
            raise InvalidMatchInputError(
                f"job {getattr(job, 'id', '<unknown>')} has no trait set"
            )


def _evaluate(
    profile: TraitSet,
    job: JobLike,
    companies_by_id: Mapping[str, CompanyLike],
) -> _Evaluation:
    company = companies_by_id.get(job.company_id)
    if company is None:
        return _Evaluation(job=job, company=None, status=JobStatus.NO_COMPANY_FOUND)
    if company.traits is None:
        raise InvalidMatchInputError(f"company {company.id} has no trait set")

    effective = effective_traits(company.traits, job.traits)
    common = common_traits(profile, effective)
    if not common:
        return _Evaluation(
            job=job,
            company=company,
            status=JobStatus.NO_COMMON_TRAITS,
            effective=effective,
        )

    squares = sum_of_squares(profile, effective, common)
    return _Evaluation(
        job=job,
        company=company,
        status=JobStatus.SCORED,
        effective=effective,
        common=common,
        sum_of_squares=squares,
        score=similarity_from_distance(math.sqrt(squares)),
    )


def _rank(evaluations: List[_Evaluation]) -> List[MatchResult]:
    matches = [
        MatchResult(job=evaluation.job, company=evaluation.company, score=evaluation.score)
        for evaluation in evaluations
        if evaluation.status is JobStatus.SCORED and passes_threshold(evaluation.score)
    ]
    # Equal scores have no defined secondary order
    return sorted(matches, key=lambda match: match.score, reverse=True)


def find_matches(
    profile: TraitSet,
    jobs: Sequence[JobLike],
    companies_by_id: Mapping[str, CompanyLike],
) -> List[MatchResult]:
    """
    Rank jobs by how closely their effective traits match a profile.

    Args:
        profile: Trait set of the candidate, may be empty
        jobs: Job records carrying ``company_id`` and ``traits``
        companies_by_id: Company records keyed by id, covering the jobs' companies

    Returns:
        Matches scoring above SCORE_THRESHOLD, best first

    Raises:
        InvalidMatchInputError: If a required argument or trait set is missing
    """
    _check_inputs(profile, jobs, companies_by_id)
    return _rank([_evaluate(profile, job, companies_by_id) for job in jobs])


def find_matches_with_diagnostics(
    profile: TraitSet,
    jobs: Sequence[JobLike],
    companies_by_id: Mapping[str, CompanyLike],
) -> MatchReport:
    """
    Same ranking as :func:`find_matches`, plus a per-job account of the decision.

    Returns:
        MatchReport whose ``matches`` equal what find_matches returns for the same input
    """
    _check_inputs(profile, jobs, companies_by_id)
    evaluations = [_evaluate(profile, job, companies_by_id) for job in jobs]
    matches = _rank(evaluations)
    return MatchReport(
        matches=matches,
        diagnostics=_build_diagnostics(profile, evaluations, matches),
    )


def _job_diagnostic(profile: TraitSet, evaluation: _Evaluation) -> JobDiagnostic:
    job = evaluation.job
    comparisons = [
        TraitComparison(
            trait=trait,
            user_value=profile[trait],
            job_value=evaluation.effective[trait],
            difference=profile[trait] - evaluation.effective[trait],
        )
        for trait in evaluation.common
    ]
    return JobDiagnostic(
        job_id=job.id,
        job_title=getattr(job, "title", ""),
        company_id=job.company_id,
        status=evaluation.status,
        common_traits=list(evaluation.common),
        comparisons=comparisons,
        sum_of_squares=evaluation.sum_of_squares,
        score=evaluation.score,
        above_threshold=evaluation.score is not None and passes_threshold(evaluation.score),
    )


def _trait_coverage(profile: TraitSet, evaluations: List[_Evaluation]) -> Dict[str, TraitCoverage]:
    resolved = [e for e in evaluations if e.status is not JobStatus.NO_COMPANY_FOUND]
    coverage: Dict[str, TraitCoverage] = {}
    for trait in sorted(profile):
        user_value = profile[trait]
        values = [e.effective[trait] for e in resolved if trait in e.effective]
        if not values:
            coverage[trait] = TraitCoverage(
                user_value=user_value,
                jobs_with_trait=0,
                suggestion=f"No job currently lists '{trait}', so it does not influence any score.",
            )
            continue

        average = float(mean(values))
        suggestion = None
        if abs(user_value - average) >= COVERAGE_GAP:
            suggestion = (
                f"Your '{trait}' value of {user_value} is far from the average "
                f"job value of {average:.1f}."
            )
        coverage[trait] = TraitCoverage(
            user_value=user_value,
            jobs_with_trait=len(values),
            average_job_value=average,
            min_job_value=min(values),
            max_job_value=max(values),
            suggestion=suggestion,
        )
    return coverage


def _feedback(profile: TraitSet, evaluations: List[_Evaluation], scored: int, kept: int) -> List[str]:
    if not evaluations:
        return ["No jobs were available to match against."]

    notes: List[str] = []
    if not profile:
        notes.append("The profile has no traits, so no job can be compared.")

    missing_company = sum(1 for e in evaluations if e.status is JobStatus.NO_COMPANY_FOUND)
    if missing_company:
        notes.append(f"{missing_company} job(s) skipped because their company could not be found.")

    no_overlap = sum(1 for e in evaluations if e.status is JobStatus.NO_COMMON_TRAITS)
    if no_overlap and profile:
        notes.append(f"{no_overlap} job(s) share no traits with the profile.")

    below = scored - kept
    if below:
        notes.append(f"{below} job(s) scored at or below the {SCORE_THRESHOLD} threshold.")
    return notes


def _build_diagnostics(
    profile: TraitSet,
    evaluations: List[_Evaluation],
    matches: List[MatchResult],
) -> MatchDiagnostics:
    scores = [e.score for e in evaluations if e.status is JobStatus.SCORED]
    return MatchDiagnostics(
        total_jobs_analyzed=len(evaluations),
        matches_before_threshold=len(scores),
        matches_after_threshold=len(matches),
        max_score=max(scores) if scores else None,
        threshold=SCORE_THRESHOLD,
        jobs=[_job_diagnostic(profile, e) for e in evaluations],
        trait_coverage=_trait_coverage(profile, evaluations),
        feedback=_feedback(profile, evaluations, len(scores), len(matches)),
    )
