from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from config import SERVER_SELECTION_TIMEOUT_MS
from logger import logger


def connect_to_cluster(mongo_uri: str) -> MongoClient:
    """Create a MongoClient and force one round trip so a dead server fails here."""
    try:
        client = MongoClient(mongo_uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)
        client.server_info()
    except ServerSelectionTimeoutError as e:
        raise ConnectionError(
            "Connection timed out. Check your MongoDB URI and that the server is running."
        ) from e
    except ConnectionFailure as e:
        raise ConnectionError(f"Failed to connect to MongoDB at {mongo_uri}") from e

    logger.info("Connected to %s", mongo_uri)
    return client


def get_collection(client: MongoClient, database_name: str, collection_name: str) -> Collection:
    return client[database_name][collection_name]
