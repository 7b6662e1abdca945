"""
MongoDB access for the service.

One ``MongoDBClientWrapper`` per process, connected in the application
lifespan (or by a script) and closed on shutdown. Repositories ask it for
collections by name.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from traitmatch.core.config import settings
from traitmatch.log.logging import logger


@dataclass
class MongoConfig:
    uri: str
    database: str
    timeout_ms: int = 5000

    @property
    def safe_host(self) -> str:
        """Host part of the URI, without credentials."""
        return self.uri.rsplit("@", 1)[-1]


class MongoDBError(Exception):
    """Base exception for MongoDB errors, with structured context for logging."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = context or {}


class MongoDBConnectionError(MongoDBError):
    pass


class MongoDBClientWrapper:
    """Owns the motor client and the configured database handle."""

    def __init__(self, config: MongoConfig) -> None:
        self.config = config
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    async def initialize(self) -> None:
        """
        Connect and verify the server answers.

        Raises:
            MongoDBConnectionError: If the server cannot be reached within the timeout
        """
        context = {"host": self.config.safe_host, "database": self.config.database}
        logger.info("Connecting to MongoDB", action="mongodb_connect", **context)

        client = AsyncIOMotorClient(self.config.uri, serverSelectionTimeoutMS=self.config.timeout_ms)
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            context.update(error=str(e), error_type=type(e).__name__)
            logger.error("Failed to connect to MongoDB", action="mongodb_connect", **context)
            raise MongoDBConnectionError("Failed to connect to MongoDB", context) from e

        self._client = client
        self._db = client[self.config.database]
        logger.success("Connected to MongoDB", action="mongodb_connect", **context)

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise MongoDBError("MongoDB client not initialized", {"action": "get_client"})
        return self._client

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise MongoDBError("MongoDB database not initialized", {"action": "get_database"})
        return self._db

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        return self.db.get_collection(name)

    async def ping(self) -> bool:
        """True when the server answers, False otherwise (including before initialize)."""
        try:
            await self.client.admin.command("ping")
        except Exception as e:
            logger.warning(
                "MongoDB ping failed",
                action="mongodb_ping",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        return True

    async def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("MongoDB connection closed", action="mongodb_close")


def create_mongodb_client() -> MongoDBClientWrapper:
    return MongoDBClientWrapper(
        MongoConfig(
            uri=settings.mongodb,
            database=settings.mongodb_database,
            timeout_ms=settings.mongodb_timeout_ms,
        )
    )


mongodb = create_mongodb_client()
