from typing import Optional

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.repositories.base import MongoRepository
from traitmatch.schemas.user import UserSchema


class UserRepository(MongoRepository[UserSchema]):
    """Data access for candidate users."""

    schema = UserSchema

    async def get_by_email(self, email: str) -> Optional[UserSchema]:
        document = await self.collection.find_one({"email": email})
        return self._from_document(document) if document else None


def get_user_repository() -> UserRepository:
    return UserRepository(mongodb.get_collection(settings.users_collection))
