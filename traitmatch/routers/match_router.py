"""
Matching endpoints.

POST /match ranks the job catalog against a trait profile. POST /match/debug
returns the same ranking along with a per-job explanation of the outcome.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from traitmatch.libs.matching import CatalogUnavailableError, InvalidMatchInputError
from traitmatch.log.logging import logger
from traitmatch.repositories.companies import CompanyRepository, get_company_repository
from traitmatch.repositories.jobs import JobRepository, get_job_repository
from traitmatch.schemas.match import MatchReportSchema, MatchRequest, MatchResultSchema
from traitmatch.services.matching_service import match_profile, match_profile_with_diagnostics

router = APIRouter(
    prefix="/match",
    tags=["match"],
    responses={
        400: {"description": "Invalid profile"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "",
    response_model=List[MatchResultSchema],
    summary="Match a profile against the job catalog",
    description="Returns (job, company, score) triples above the score threshold, best first.",
)
async def match(
    request: MatchRequest,
    company_id: Optional[str] = Query(
        None, alias="companyId", description="Only consider this company's jobs"
    ),
    job_repository: JobRepository = Depends(get_job_repository),
    company_repository: CompanyRepository = Depends(get_company_repository),
) -> List[MatchResultSchema]:
    """
    Match a trait profile.

    Args:
        request: The profile's trait map
        company_id: Optional company filter
        job_repository: Job source
        company_repository: Company source

    Returns:
        Ranked matches
    """
    try:
        logger.info(
            "Matching profile with {trait_count} traits",
            trait_count=len(request.traits),
            company_id=company_id,
        )
        matches = await match_profile(
            request.traits,
            job_repository=job_repository,
            company_repository=company_repository,
            company_id=company_id,
        )
        return [MatchResultSchema.model_validate(m) for m in matches]
    except HTTPException:
        raise
    except InvalidMatchInputError as e:
        logger.warning("Rejected match request", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogUnavailableError as e:
        logger.error("Match catalog unavailable", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Job catalog is currently unavailable.",
        )
    except Exception as e:
        logger.exception(
            "Unexpected error while matching",
            error_type=type(e).__name__,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while processing the request.",
        )


@router.post(
    "/debug",
    response_model=MatchReportSchema,
    summary="Match a profile and explain every job's outcome",
)
async def match_debug(
    request: MatchRequest,
    company_id: Optional[str] = Query(None, alias="companyId"),
    job_repository: JobRepository = Depends(get_job_repository),
    company_repository: CompanyRepository = Depends(get_company_repository),
) -> MatchReportSchema:
    try:
        report = await match_profile_with_diagnostics(
            request.traits,
            job_repository=job_repository,
            company_repository=company_repository,
            company_id=company_id,
        )
        return MatchReportSchema.model_validate(report)
    except HTTPException:
        raise
    except InvalidMatchInputError as e:
        logger.warning("Rejected match diagnostics request", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogUnavailableError as e:
        logger.error("Match catalog unavailable", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Job catalog is currently unavailable.",
        )
    except Exception as e:
        logger.exception("Unexpected error while building match diagnostics", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while processing the request.",
        )
