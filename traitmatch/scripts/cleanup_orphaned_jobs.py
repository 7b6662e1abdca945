"""
Delete jobs that reference a company which no longer exists.

Jobs linked to an existing company are left untouched. Orphaned jobs are
never matched, so removing them only shrinks the catalog.

Usage:
    python -m traitmatch.scripts.cleanup_orphaned_jobs [--dry-run]
"""

import argparse
import asyncio
import sys
from typing import Dict, Iterable, List, Optional, Tuple

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.log.logging import logger
from traitmatch.repositories.companies import CompanyRepository
from traitmatch.repositories.jobs import JobRepository
from traitmatch.schemas.company import CompanySchema
from traitmatch.schemas.job import JobSchema


def find_orphaned_jobs(
    jobs: Iterable[JobSchema], companies: Iterable[CompanySchema]
) -> Tuple[List[JobSchema], List[JobSchema]]:
    """
    Split jobs by whether their company exists.

    Returns:
        (orphaned, linked), both in input order
    """
    valid_company_ids = {company.id for company in companies}
    orphaned: List[JobSchema] = []
    linked: List[JobSchema] = []
    for job in jobs:
        (linked if job.company_id in valid_company_ids else orphaned).append(job)
    return orphaned, linked


async def cleanup(
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    dry_run: bool = False,
) -> Dict[str, int]:
    companies = await company_repository.get_all()
    jobs = await job_repository.get_all()
    orphaned, linked = find_orphaned_jobs(jobs, companies)

    logger.info(
        "Found {orphaned} orphaned and {linked} linked jobs across {companies} companies",
        orphaned=len(orphaned),
        linked=len(linked),
        companies=len(companies),
    )
    for job in orphaned:
        logger.info(
            "Orphaned job {title}",
            title=job.title,
            job_id=job.id,
            company_id=job.company_id,
        )

    deleted = 0
    failed = 0
    if not dry_run:
        for job in orphaned:
            try:
                if await job_repository.delete(job.id):
                    deleted += 1
                else:
                    failed += 1
            except Exception as e:
                failed += 1
                logger.error("Failed to delete job {title}", title=job.title, job_id=job.id, error=str(e))

    return {
        "orphaned": len(orphaned),
        "deleted": deleted,
        "failed": failed,
        "preserved": len(linked),
    }


async def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Delete jobs whose company no longer exists.")
    parser.add_argument("--dry-run", action="store_true", help="Only report orphaned jobs")
    args = parser.parse_args(argv)

    await mongodb.initialize()
    try:
        summary = await cleanup(
            JobRepository(mongodb.get_collection(settings.jobs_collection)),
            CompanyRepository(mongodb.get_collection(settings.companies_collection)),
            dry_run=args.dry_run,
        )
    finally:
        await mongodb.close()

    logger.info("Cleanup complete", dry_run=args.dry_run, **summary)
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
