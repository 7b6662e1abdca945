"""
Email based login for companies and candidates.

There is no password or token: a login is a lookup by email that tells the
client which account to act as.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from traitmatch.log.logging import logger
from traitmatch.repositories.companies import CompanyRepository, get_company_repository
from traitmatch.repositories.users import UserRepository, get_user_repository
from traitmatch.schemas.common import CompanyLoginRequest, UserLoginRequest
from traitmatch.schemas.company import CompanyLoginResponse
from traitmatch.schemas.user import UserLoginResponse

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={
        404: {"description": "No account with this email"},
        500: {"description": "Internal server error"},
    },
)


def _not_found(body) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=body.model_dump(mode="json", by_alias=True),
    )


@router.post("/company/login", response_model=CompanyLoginResponse)
async def company_login(
    request: CompanyLoginRequest,
    repository: CompanyRepository = Depends(get_company_repository),
):
    try:
        company = await repository.get_by_email(request.email)
    except Exception as e:
        logger.exception("Error during company login", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred during login.",
        )

    if company is None:
        logger.info("Company login failed, unknown email", event_type="company_login_failed")
        return _not_found(
            CompanyLoginResponse(
                success=False, message=f"Company not found with email: {request.email}"
            )
        )

    logger.info("Company {company_id} logged in", company_id=company.id, event_type="company_login")
    return CompanyLoginResponse(success=True, company=company)


@router.post("/user/login", response_model=UserLoginResponse)
async def user_login(
    request: UserLoginRequest,
    repository: UserRepository = Depends(get_user_repository),
):
    try:
        user = await repository.get_by_email(request.email)
    except Exception as e:
        logger.exception("Error during user login", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred during login.",
        )

    if user is None:
        logger.info("User login failed, unknown email", event_type="user_login_failed")
        return _not_found(
            UserLoginResponse(success=False, message=f"User not found with email: {request.email}")
        )

    logger.info("User {user_id} logged in", user_id=user.id, event_type="user_login")
    return UserLoginResponse(success=True, user=user)
