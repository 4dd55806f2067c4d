"""
Book queries: one function per read, write, aggregate and explain operation
run against the ``books`` collection.

Every function is a thin pass-through to the MongoDB query language. Results
are materialised into plain lists/dicts so callers can print or serialise
them without holding a cursor open.
"""

from typing import Any, Dict, List, Optional, Sequence

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

# ---------------------- PIPELINES ----------------------

AVERAGE_PRICE_BY_GENRE_PIPELINE: List[Dict[str, Any]] = [
    {"$group": {"_id": "$genre", "averagePrice": {"$avg": "$price"}}},
]

TOP_AUTHOR_PIPELINE: List[Dict[str, Any]] = [
    {"$group": {"_id": "$author", "count": {"$sum": 1}}},
    {"$sort": {"count": -1}},
    {"$limit": 1},
]

BOOKS_BY_DECADE_PIPELINE: List[Dict[str, Any]] = [
    {
        "$addFields": {
            "decade": {
                "$multiply": [{"$floor": {"$divide": ["$published_year", 10]}}, 10]
            }
        }
    },
    {"$group": {"_id": "$decade", "count": {"$sum": 1}}},
    {"$sort": {"_id": 1}},
]

# Documents per page for the pagination steps.
PAGE_SIZE = 5

# Pages are cut from an explicit order so that page boundaries are reproducible.
PAGINATION_SORT = [("_id", ASCENDING)]


# ---------------------- READS ----------------------

def find_books(
    collection: Collection,
    mongo_filter: Optional[Dict[str, Any]] = None,
    projection: Optional[Dict[str, int]] = None,
) -> List[Dict[str, Any]]:
    return list(collection.find(mongo_filter or {}, projection))


def find_by_genre(collection: Collection, genre: str) -> List[Dict[str, Any]]:
    return find_books(collection, {"genre": genre})


def find_published_after(collection: Collection, year: int) -> List[Dict[str, Any]]:
    return find_books(collection, {"published_year": {"$gt": year}})


def find_by_author(collection: Collection, author: str) -> List[Dict[str, Any]]:
    return find_books(collection, {"author": author})


def find_by_title(collection: Collection, title: str) -> Optional[Dict[str, Any]]:
    return collection.find_one({"title": title})


def find_in_stock_published_after(collection: Collection, year: int) -> List[Dict[str, Any]]:
    return find_books(collection, {"in_stock": True, "published_year": {"$gt": year}})


def find_projected(
    collection: Collection,
    fields: Sequence[str] = ("title", "author", "price"),
) -> List[Dict[str, Any]]:
    """Return every book reduced to ``fields``; ``_id`` is always excluded."""
    projection = {field: 1 for field in fields}
    projection["_id"] = 0
    return find_books(collection, projection=projection)


def find_sorted_by_price(collection: Collection, direction: int = ASCENDING) -> List[Dict[str, Any]]:
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Sort direction must be {ASCENDING} or {DESCENDING}, got {direction!r}")
    return list(collection.find().sort("price", direction))


def find_page(collection: Collection, page: int, page_size: int = PAGE_SIZE) -> List[Dict[str, Any]]:
    """Return one page of books (1-based ``page``)."""
    if page < 1:
        raise ValueError(f"Page numbers start at 1, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}")

    skip = (page - 1) * page_size
    cursor = collection.find().sort(PAGINATION_SORT).skip(skip).limit(page_size)
    return list(cursor)


def count_books(collection: Collection) -> int:
    return collection.count_documents({})


# ---------------------- WRITES ----------------------

def update_price(collection: Collection, title: str, price: float) -> Dict[str, int]:
    """Set the price of the book titled ``title``. Matching nothing is not an error."""
    result = collection.update_one({"title": title}, {"$set": {"price": price}})
    return {
        "matched_count": result.matched_count,
        "modified_count": result.modified_count,
    }


def delete_by_title(collection: Collection, title: str) -> Dict[str, int]:
    result = collection.delete_one({"title": title})
    return {"deleted_count": result.deleted_count}


# ---------------------- AGGREGATES ----------------------

def average_price_by_genre(collection: Collection) -> List[Dict[str, Any]]:
    return list(collection.aggregate(AVERAGE_PRICE_BY_GENRE_PIPELINE))


def top_author(collection: Collection) -> List[Dict[str, Any]]:
    return list(collection.aggregate(TOP_AUTHOR_PIPELINE))


def count_by_decade(collection: Collection) -> List[Dict[str, Any]]:
    return list(collection.aggregate(BOOKS_BY_DECADE_PIPELINE))


# ---------------------- EXPLAIN ----------------------

def explain_find_by_title(
    collection: Collection,
    title: str,
    verbosity: str = "executionStats",
) -> Dict[str, Any]:
    """Run ``explain`` for a title lookup and return its ``executionStats`` section.

    ``Cursor.explain()`` does not take a verbosity, so the explain command is
    issued directly against the database.
    """
    explain_result = collection.database.command(
        "explain",
        {"find": collection.name, "filter": {"title": title}},
        verbosity=verbosity,
    )
    return explain_result.get("executionStats", {})
