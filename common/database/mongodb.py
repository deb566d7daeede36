"""
Generic async MongoDB connection manager.

Wraps a Motor client so the application can connect at startup, hand the
database object to its services, and disconnect cleanly on shutdown.

Example:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(
        uri="mongodb://localhost:27017",
        database_name="classbook",
    )
    users = db.get_collection("users")
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def mask_uri(uri: str) -> str:
    """Strip credentials from a connection string for logging."""
    if "@" not in uri:
        return uri
    scheme, sep, rest = uri.partition("://")
    if not sep:
        return uri.split("@")[-1]
    return f"{scheme}://{rest.split('@')[-1]}"


class MongoDB:
    """Generic MongoDB connection manager - works with any database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Connect to MongoDB and verify the server is reachable.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
        """
        logger.info(f"Connecting to MongoDB: {mask_uri(uri)}")
        logger.debug(f"Database name: {database_name}")

        try:
            self._client = AsyncIOMotorClient(uri)
            self._database_name = database_name
            await self._client.admin.command("ping")
            logger.info(f"Successfully connected to MongoDB database: {database_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def disconnect(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            logger.info(f"Disconnecting from MongoDB database: {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None
            logger.debug("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if a client is open."""
        return self._client is not None

    @property
    def client(self) -> Optional[AsyncIOMotorClient]:
        """Get the underlying Motor client."""
        return self._client

    @property
    def database_name(self) -> Optional[str]:
        """Get the current database name."""
        return self._database_name

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the underlying Motor database instance."""
        if not self._client or not self._database_name:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]

    def get_collection(self, name: str):
        """
        Get a raw Motor collection.

        Args:
            name: Collection name

        Returns:
            AsyncIOMotorCollection instance
        """
        if not self._client or not self._database_name:
            logger.error("Attempted to get collection without database connection")
            raise RuntimeError("Database not connected")
        return self._client[self._database_name][name]
