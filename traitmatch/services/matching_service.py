from typing import Dict, List, Optional, Tuple

from traitmatch.libs.matching import (
    CatalogUnavailableError,
    JobStatus,
    MatchReport,
    MatchResult,
    find_matches,
    find_matches_with_diagnostics,
)
from traitmatch.libs.matching.traits import TraitSet
from traitmatch.log.logging import logger
from traitmatch.metrics import (
    async_matching_algorithm_timer,
    report_jobs_analyzed,
    report_match_count,
    report_match_score_distribution,
)
from traitmatch.repositories.companies import CompanyRepository
from traitmatch.repositories.jobs import JobRepository
from traitmatch.schemas.company import CompanySchema
from traitmatch.schemas.job import JobSchema

ALGORITHM = "trait_distance"


async def load_catalog(
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    company_id: Optional[str] = None,
) -> Tuple[List[JobSchema], Dict[str, CompanySchema]]:
    """
    Fetch the job/company snapshot a match call runs against.

    Args:
        job_repository: Source of jobs
        company_repository: Source of companies, queried once for every referenced id
        company_id: Optional. Only consider this company's jobs.

    Returns:
        The jobs and the companies they reference, keyed by id

    Raises:
        CatalogUnavailableError: If either repository fails
    """
    try:
        if company_id:
            jobs = await job_repository.get_by_company_id(company_id)
        else:
            jobs = await job_repository.get_all()

        required_company_ids = {job.company_id for job in jobs}
        companies = await company_repository.get_by_ids(required_company_ids)
    except Exception as e:
        logger.exception(
            "Error loading match catalog",
            event_type="catalog_load_error",
            company_id=company_id,
            error_type=type(e).__name__,
            error_details=str(e),
        )
        raise CatalogUnavailableError("Failed to load jobs and companies.") from e

    companies_by_id = {company.id: company for company in companies}
    logger.info(
        "Loaded {jobs} jobs and {companies} of {required} referenced companies",
        event_type="catalog_loaded",
        jobs=len(jobs),
        companies=len(companies_by_id),
        required=len(required_company_ids),
        company_id=company_id,
    )
    return jobs, companies_by_id


def _report_metrics(jobs_analyzed: int, matches: List[MatchResult]) -> None:
    tags = {"algorithm": ALGORITHM}
    report_jobs_analyzed(jobs_analyzed, tags)
    report_match_count(len(matches), tags)
    report_match_score_distribution([match.score for match in matches], tags)


@async_matching_algorithm_timer(ALGORITHM)
async def match_profile(
    profile: TraitSet,
    *,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    company_id: Optional[str] = None,
) -> List[MatchResult]:
    """Rank the current jobs against a trait profile, best first."""
    jobs, companies_by_id = await load_catalog(job_repository, company_repository, company_id)

    matches = find_matches(profile, jobs, companies_by_id)

    if matches:
        logger.info(
            "Profile matched with {amount} jobs",
            event_type="profile_matched",
            amount=len(matches),
            best_score=matches[0].score,
        )
    else:
        logger.warning(
            "Profile matched with zero jobs",
            event_type="profile_matched",
            jobs_analyzed=len(jobs),
            profile_traits=sorted(profile or {}),
        )
    _report_metrics(len(jobs), matches)
    return matches


@async_matching_algorithm_timer(f"{ALGORITHM}_diagnostics")
async def match_profile_with_diagnostics(
    profile: TraitSet,
    *,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    company_id: Optional[str] = None,
) -> MatchReport:
    """Same ranking as :func:`match_profile`, with the per-job explanation attached."""
    jobs, companies_by_id = await load_catalog(job_repository, company_repository, company_id)

    report = find_matches_with_diagnostics(profile, jobs, companies_by_id)
    diagnostics = report.diagnostics

    for job in diagnostics.jobs:
        if job.status is JobStatus.NO_COMPANY_FOUND:
            logger.debug(
                "No company found for job {job_title}",
                job_id=job.job_id,
                job_title=job.job_title,
                company_id=job.company_id,
            )
        elif job.status is JobStatus.NO_COMMON_TRAITS:
            logger.debug(
                "No common traits between profile and job {job_title}",
                job_id=job.job_id,
                job_title=job.job_title,
            )
        else:
            logger.debug(
                "Job {job_title} scored {score}",
                job_id=job.job_id,
                job_title=job.job_title,
                score=job.score,
                common_traits=len(job.common_traits),
            )

    logger.info(
        "Diagnostics match finished",
        event_type="profile_matched_diagnostics",
        total_jobs_analyzed=diagnostics.total_jobs_analyzed,
        matches_before_threshold=diagnostics.matches_before_threshold,
        matches_after_threshold=diagnostics.matches_after_threshold,
        max_score=diagnostics.max_score,
    )
    _report_metrics(diagnostics.total_jobs_analyzed, report.matches)
    return report
