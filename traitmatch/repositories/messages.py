from typing import List

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.log.logging import logger
from traitmatch.repositories.base import MongoRepository
from traitmatch.schemas.message import MessageSchema, MessageStatus


class MessageRepository(MongoRepository[MessageSchema]):
    """Data access for messages between users and companies."""

    schema = MessageSchema

    async def save(self, entity: MessageSchema) -> MessageSchema:
        """
        Save a message.

        A message without a thread id starts a new thread named after itself.
        Anonymous messages never keep the sender's name or profile.
        """
        updates = {}
        if entity.thread_id is None:
            updates["thread_id"] = entity.id
        if entity.is_anonymous:
            updates["sender_name"] = None
            updates["sender_profile"] = None
        if updates:
            entity = entity.model_copy(update=updates)
        return await super().save(entity)

    async def get_for_company(self, company_id: str) -> List[MessageSchema]:
        return await self._find(
            {"$or": [{"toId": company_id}, {"fromId": company_id}]}, sort="createdAt"
        )

    async def get_for_user(self, user_id: str) -> List[MessageSchema]:
        return await self._find(
            {"$or": [{"fromId": user_id}, {"toId": user_id}]}, sort="createdAt"
        )

    async def get_by_thread(self, thread_id: str) -> List[MessageSchema]:
        return await self._find({"threadId": thread_id}, sort="createdAt")

    async def update_status(self, message_id: str, status: MessageStatus) -> bool:
        result = await self.collection.update_one(
            {"_id": message_id}, {"$set": {"status": status.value}}
        )
        logger.info(
            "Updated message status",
            message_id=message_id,
            status=status.value,
            matched=result.matched_count,
        )
        return result.matched_count > 0


def get_message_repository() -> MessageRepository:
    return MessageRepository(mongodb.get_collection(settings.messages_collection))
