"""
Repository base classes.

Every collection is wrapped by a thin repository that stores the camelCase
JSON form of a schema, keyed by ``_id`` equal to the entity id.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel, ValidationError

from traitmatch.log.logging import logger


T = TypeVar('T', bound=BaseModel)


class Repository(Generic[T], ABC):
    """Abstract base class for repositories."""

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Save an entity to the repository."""
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[T]:
        """Retrieve an entity by its ID."""
        pass

    @abstractmethod
    async def get_all(self, filters: Dict = None) -> List[T]:
        """Retrieve all entities matching the given filters."""
        pass

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Delete an entity by its ID."""
        pass


class MongoRepository(Repository[T]):
    """Repository over a single MongoDB collection."""

    schema: Type[T]

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize the repository.

        Args:
            collection: Motor collection holding the documents
        """
        self.collection = collection

    @property
    def entity_name(self) -> str:
        return self.schema.__name__.replace("Schema", "").lower()

    def _to_document(self, entity: T) -> Dict[str, Any]:
        document = entity.model_dump(mode="json", by_alias=True)
        document["_id"] = document["id"]
        return document

    def _from_document(self, document: Dict[str, Any]) -> T:
        data = dict(document)
        data.pop("_id", None)
        return self.schema.model_validate(data)

    async def _find(self, query: Dict[str, Any], sort: Optional[str] = None) -> List[T]:
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort, 1)
        documents = await cursor.to_list(length=None)

        entities: List[T] = []
        for document in documents:
            try:
                entities.append(self._from_document(document))
            except ValidationError as e:
                # Skip malformed items instead of failing the whole listing
                logger.warning(
                    "Skipping malformed {entity} document",
                    entity=self.entity_name,
                    document_id=str(document.get("_id")),
                    error=str(e),
                )
        return entities

    async def save(self, entity: T) -> T:
        """
        Insert or replace an entity.

        Args:
            entity: Entity to save

        Returns:
            The saved entity
        """
        try:
            await self.collection.replace_one(
                {"_id": entity.id}, self._to_document(entity), upsert=True
            )
            logger.info(
                "Saved {entity}",
                entity=self.entity_name,
                entity_id=entity.id,
            )
            return entity
        except Exception as e:
            logger.error(
                "Failed to save {entity}",
                entity=self.entity_name,
                entity_id=entity.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        document = await self.collection.find_one({"_id": entity_id})
        if document is None:
            logger.debug(
                "{entity} not found",
                entity=self.entity_name,
                entity_id=entity_id,
            )
            return None
        return self._from_document(document)

    async def get_all(self, filters: Dict = None) -> List[T]:
        return await self._find(filters or {})

    async def delete(self, entity_id: str) -> bool:
        result = await self.collection.delete_one({"_id": entity_id})
        deleted = result.deleted_count > 0
        logger.info(
            "Delete {entity} requested",
            entity=self.entity_name,
            entity_id=entity_id,
            deleted=deleted,
        )
        return deleted
