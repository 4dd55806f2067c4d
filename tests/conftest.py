import mongomock
import pytest

from seed import SEED_BOOKS, seed_books


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def empty_books(mongo_client):
    return mongo_client["plp_bookstore"]["books"]


@pytest.fixture
def books(empty_books):
    seed_books(empty_books, SEED_BOOKS)
    return empty_books


@pytest.fixture
def fake_explain(monkeypatch):
    """mongomock has no ``explain`` command; stand in a fixed stats document."""
    import queries

    stats = {"nReturned": 1, "totalDocsExamined": 1, "executionSuccess": True}
    monkeypatch.setattr(queries, "explain_find_by_title", lambda collection, title: stats)
    return stats
