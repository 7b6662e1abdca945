"""
Job catalog endpoints.

Jobs are created by companies and feed the matcher; their traits override
the owning company's traits.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from traitmatch.log.logging import logger
from traitmatch.repositories.jobs import JobRepository, get_job_repository
from traitmatch.schemas.job import JobSchema

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    responses={
        404: {"description": "Job not found"},
        500: {"description": "Internal server error"},
    },
)


@router.get("", response_model=List[JobSchema], summary="List jobs")
async def list_jobs(
    company_id: Optional[str] = Query(
        None, alias="companyId", description="Only return this company's jobs"
    ),
    repository: JobRepository = Depends(get_job_repository),
) -> List[JobSchema]:
    try:
        if company_id:
            return await repository.get_by_company_id(company_id)
        return await repository.get_all()
    except Exception as e:
        logger.exception("Error listing jobs", company_id=company_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while listing jobs.",
        )


@router.post(
    "",
    response_model=JobSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a job",
)
async def create_job(
    job: JobSchema,
    repository: JobRepository = Depends(get_job_repository),
) -> JobSchema:
    try:
        saved = await repository.save(job)
        logger.info(
            "Job {job_title} created for company {company_id}",
            job_title=saved.title,
            company_id=saved.company_id,
            job_id=saved.id,
        )
        return saved
    except Exception as e:
        logger.exception("Error creating job", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while creating the job.",
        )


@router.get("/{job_id}", response_model=JobSchema, summary="Get a job")
async def get_job(
    job_id: str,
    repository: JobRepository = Depends(get_job_repository),
) -> JobSchema:
    try:
        job = await repository.get_by_id(job_id)
    except Exception as e:
        logger.exception("Error fetching job", job_id=job_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while fetching the job.",
        )

    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


@router.delete(
    "/{job_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a job",
)
async def delete_job(
    job_id: str,
    repository: JobRepository = Depends(get_job_repository),
) -> Response:
    try:
        deleted = await repository.delete(job_id)
    except Exception as e:
        logger.exception("Error deleting job", job_id=job_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while deleting the job.",
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
