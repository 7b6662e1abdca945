from fastapi import APIRouter, Depends, HTTPException, status

from traitmatch.log.logging import logger
from traitmatch.repositories.users import UserRepository, get_user_repository
from traitmatch.schemas.user import UserSchema

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)


@router.post("", response_model=UserSchema, summary="Create or replace a user")
async def create_user(
    user: UserSchema,
    repository: UserRepository = Depends(get_user_repository),
) -> UserSchema:
    try:
        return await repository.save(user)
    except Exception as e:
        logger.exception("Error saving user", user_id=user.id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while saving the user.",
        )


@router.get("/{identifier}", response_model=UserSchema, summary="Get a user by id or email")
async def get_user(
    identifier: str,
    repository: UserRepository = Depends(get_user_repository),
) -> UserSchema:
    try:
        if "@" in identifier:
            user = await repository.get_by_email(identifier)
        else:
            user = await repository.get_by_id(identifier)
    except Exception as e:
        logger.exception("Error fetching user", identifier=identifier, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while fetching the user.",
        )

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
