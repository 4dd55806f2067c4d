"""
Index creation and inspection for the books collection.
"""

from typing import Any, Dict, List

from pymongo import ASCENDING
from pymongo.collection import Collection

from logger import logger

TITLE_INDEX_KEYS = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX_KEYS = [("author", ASCENDING), ("published_year", ASCENDING)]


def create_title_index(collection: Collection) -> str:
    """Create the ascending ``title`` index. Re-creating it is a no-op."""
    name = collection.create_index(TITLE_INDEX_KEYS)
    logger.info("Index ready: %s", name)
    return name


def create_author_year_index(collection: Collection) -> str:
    """Create the compound ``(author, published_year)`` index. Re-creating it is a no-op."""
    name = collection.create_index(AUTHOR_YEAR_INDEX_KEYS)
    logger.info("Index ready: %s", name)
    return name


def get_collection_indexes(collection: Collection) -> List[Dict[str, Any]]:
    """Return a list of index descriptions for the collection.

    Each entry contains:
    - ``name``: index name
    - ``keys``: list of ``(field, direction)`` pairs
    - ``unique``: whether the index enforces uniqueness
    """
    indexes: List[Dict[str, Any]] = []
    for name, info in collection.index_information().items():
        indexes.append({
            "name": name,
            "keys": info.get("key", []),
            "unique": info.get("unique", False),
        })
    return indexes
