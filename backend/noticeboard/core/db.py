# noticeboard/core/db.py
"""
Database configuration and initialization module.
Handles the MongoDB client, database selection and Beanie model registration.
"""
from urllib.parse import urlsplit
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from beanie import init_beanie
from noticeboard.models import DOCUMENT_MODELS

# Used when the connection string carries no database path
DEFAULT_DB_NAME = "digital_notice_board"


def database_name(uri: str) -> str:
    """
    Database name from the path component of a connection string.

    "mongodb://127.0.0.1:27017/digital_notice_board" -> "digital_notice_board"
    """
    name = urlsplit(uri).path.lstrip("/")
    return name or DEFAULT_DB_NAME


class Database:
    """
    The process-wide persistence handle.

    Created once by the bootstrap and handed to the application factory; route
    handlers reach it through app.state.db.
    """

    def __init__(self, client: AsyncIOMotorClient, database: AsyncIOMotorDatabase):
        self.client = client
        self.database = database

    @property
    def name(self) -> str:
        return self.database.name

    def close(self) -> None:
        self.client.close()


async def init_db(uri: str, client: AsyncIOMotorClient | None = None) -> Database:
    """
    Connect to MongoDB and register all document models.

    The driver connects lazily, so a ping is issued to surface unreachable
    servers here instead of on the first request.

    Args:
        uri: MongoDB connection string
        client: Optional pre-built client (tests pass an in-memory one)

    Raises:
        pymongo.errors.InvalidURI / ConfigurationError: malformed connection string
        pymongo.errors.ServerSelectionTimeoutError: server unreachable
    """
    if client is None:
        client = AsyncIOMotorClient(uri)
    try:
        await client.admin.command("ping")
        database = client[database_name(uri)]
        await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    except Exception:
        client.close()
        raise
    return Database(client, database)


async def close_db(db: Database | None) -> None:
    """
    Close the MongoDB client, if one was opened.
    """
    if db is not None:
        db.close()
