from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from traitmatch.log.logging import logger
from traitmatch.repositories.companies import CompanyRepository, get_company_repository
from traitmatch.schemas.company import CompanySchema

router = APIRouter(
    prefix="/companies",
    tags=["companies"],
    responses={
        404: {"description": "Company not found"},
        500: {"description": "Internal server error"},
    },
)


@router.get("", response_model=List[CompanySchema], summary="List companies")
async def list_companies(
    repository: CompanyRepository = Depends(get_company_repository),
) -> List[CompanySchema]:
    try:
        return await repository.get_all()
    except Exception as e:
        logger.exception("Error listing companies", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while listing companies.",
        )


@router.post(
    "",
    response_model=CompanySchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
)
async def create_company(
    company: CompanySchema,
    repository: CompanyRepository = Depends(get_company_repository),
) -> CompanySchema:
    try:
        return await repository.save(company)
    except Exception as e:
        logger.exception("Error creating company", company_id=company.id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while creating the company.",
        )


@router.get(
    "/{identifier}",
    response_model=CompanySchema,
    summary="Get a company by id or email",
    description="Identifiers containing '@' are looked up as email addresses.",
)
async def get_company(
    identifier: str,
    repository: CompanyRepository = Depends(get_company_repository),
) -> CompanySchema:
    try:
        if "@" in identifier:
            company = await repository.get_by_email(identifier)
        else:
            company = await repository.get_by_id(identifier)
    except Exception as e:
        logger.exception("Error fetching company", identifier=identifier, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while fetching the company.",
        )

    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
    return company
