from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from traitmatch.log.logging import logger
from traitmatch.repositories.messages import MessageRepository, get_message_repository
from traitmatch.schemas.message import MessageSchema, MessageStatusUpdate, StatusOut

router = APIRouter(
    prefix="/messages",
    tags=["messages"],
    responses={
        404: {"description": "Message not found"},
        500: {"description": "Internal server error"},
    },
)


def _internal_error(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"An internal error occurred while {action}.",
    )


@router.post(
    "",
    response_model=MessageSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    description="Anonymous messages are stored without the sender's name and profile.",
)
async def create_message(
    message: MessageSchema,
    repository: MessageRepository = Depends(get_message_repository),
) -> MessageSchema:
    try:
        saved = await repository.save(message)
        logger.info(
            "Message sent",
            event_type="message_sent",
            message_id=saved.id,
            thread_id=saved.thread_id,
            is_anonymous=saved.is_anonymous,
            is_from_company=saved.is_from_company,
        )
        return saved
    except Exception as e:
        logger.exception("Error saving message", error=str(e))
        raise _internal_error("sending the message")


@router.get("/company/{company_id}", response_model=List[MessageSchema])
async def company_messages(
    company_id: str,
    repository: MessageRepository = Depends(get_message_repository),
) -> List[MessageSchema]:
    try:
        return await repository.get_for_company(company_id)
    except Exception as e:
        logger.exception("Error listing company messages", company_id=company_id, error=str(e))
        raise _internal_error("listing messages")


@router.get("/user/{user_id}", response_model=List[MessageSchema])
async def user_messages(
    user_id: str,
    repository: MessageRepository = Depends(get_message_repository),
) -> List[MessageSchema]:
    try:
        return await repository.get_for_user(user_id)
    except Exception as e:
        logger.exception("Error listing user messages", user_id=user_id, error=str(e))
        raise _internal_error("listing messages")


@router.get("/thread/{thread_id}", response_model=List[MessageSchema])
async def thread_messages(
    thread_id: str,
    repository: MessageRepository = Depends(get_message_repository),
) -> List[MessageSchema]:
    try:
        return await repository.get_by_thread(thread_id)
    except Exception as e:
        logger.exception("Error listing thread messages", thread_id=thread_id, error=str(e))
        raise _internal_error("listing messages")


@router.patch("/{message_id}/status", response_model=StatusOut)
async def update_message_status(
    message_id: str,
    update: MessageStatusUpdate,
    repository: MessageRepository = Depends(get_message_repository),
) -> StatusOut:
    try:
        existing = await repository.get_by_id(message_id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")

        await repository.update_status(message_id, update.status)
        return StatusOut(status="updated")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error updating message status", message_id=message_id, error=str(e))
        raise _internal_error("updating the message")
