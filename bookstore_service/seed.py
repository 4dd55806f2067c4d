"""
Seed the books collection with a known dataset so the query run has
something to work on.

Usage:
    python seed.py
"""

import sys
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from cluster_manager import connect_to_cluster, get_collection
from config import COLLECTION_NAME, DATABASE_NAME, MONGO_URI
from logger import logger


class Book(BaseModel):
    title: str = Field(min_length=1)
    author: str
    genre: str
    published_year: int = Field(ge=0)
    price: float = Field(ge=0)
    in_stock: bool = True


SEED_BOOKS: List[Dict[str, Any]] = [
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Fiction",
     "published_year": 1960, "price": 12.99, "in_stock": True},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian",
     "published_year": 1949, "price": 10.99, "in_stock": True},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Fiction",
     "published_year": 1925, "price": 9.99, "in_stock": True},
    {"title": "Brave New World", "author": "Aldous Huxley", "genre": "Dystopian",
     "published_year": 1932, "price": 11.49, "in_stock": False},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1937, "price": 14.99, "in_stock": True},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "genre": "Fiction",
     "published_year": 1951, "price": 8.99, "in_stock": True},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance",
     "published_year": 1813, "price": 7.99, "in_stock": True},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1954, "price": 19.99, "in_stock": True},
    {"title": "Animal Farm", "author": "George Orwell", "genre": "Political Satire",
     "published_year": 1945, "price": 8.49, "in_stock": False},
    {"title": "The Alchemist", "author": "Paulo Coelho", "genre": "Fiction",
     "published_year": 1988, "price": 10.49, "in_stock": True},
    {"title": "Moby Dick", "author": "Herman Melville", "genre": "Adventure",
     "published_year": 1851, "price": 12.49, "in_stock": False},
    {"title": "Wuthering Heights", "author": "Emily Bronte", "genre": "Gothic Fiction",
     "published_year": 1847, "price": 9.49, "in_stock": True},
    {"title": "The Night Circus", "author": "Erin Morgenstern", "genre": "Fantasy",
     "published_year": 2011, "price": 13.49, "in_stock": True},
    {"title": "Project Hail Mary", "author": "Andy Weir", "genre": "Science Fiction",
     "published_year": 2021, "price": 16.99, "in_stock": True},
]


def seed_books(
    collection: Collection,
    books: Iterable[Dict[str, Any]] = SEED_BOOKS,
    drop: bool = True,
) -> int:
    """Validate ``books`` and insert them, replacing the existing documents when ``drop`` is set.

    Raises ``pydantic.ValidationError`` before touching the collection if any
    entry is malformed. Old documents are removed only after the insert
    succeeds, so a failed insert leaves the previous contents in place.
    Returns the number of inserted documents.
    """
    documents = [Book(**book).model_dump() for book in books]

    old_ids = [doc["_id"] for doc in collection.find({}, {"_id": 1})] if drop else []

    inserted = 0
    if documents:
        inserted = len(collection.insert_many(documents).inserted_ids)
        logger.info("Seeded %d books into %s", inserted, collection.full_name)

    if old_ids:
        removed = collection.delete_many({"_id": {"$in": old_ids}}).deleted_count
        logger.info("Cleared %d previous documents from %s", removed, collection.full_name)

    return inserted


def main() -> None:
    try:
        client = connect_to_cluster(MONGO_URI)
    except ConnectionError as e:
        logger.error("Seeding failed: %s", e)
        sys.exit(1)

    try:
        inserted = seed_books(get_collection(client, DATABASE_NAME, COLLECTION_NAME))
    except PyMongoError as e:
        logger.error("Seeding failed: %s", e)
        sys.exit(1)
    finally:
        client.close()

    print(f"Inserted {inserted} books into {DATABASE_NAME}.{COLLECTION_NAME}")


if __name__ == "__main__":
    main()
