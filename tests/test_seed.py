import pytest
from pydantic import ValidationError
from pymongo.errors import BulkWriteError, OperationFailure

import seed
from seed import SEED_BOOKS, Book, seed_books


def test_seed_books_inserts_dataset(empty_books):
    assert seed_books(empty_books) == len(SEED_BOOKS)
    assert empty_books.count_documents({}) == len(SEED_BOOKS)
    assert empty_books.find_one({"title": "The Hobbit"})["author"] == "J.R.R. Tolkien"


def test_seed_books_drop_replaces_existing(empty_books):
    seed_books(empty_books)
    seed_books(empty_books)
    assert empty_books.count_documents({}) == len(SEED_BOOKS)


def test_seed_books_without_drop_appends(empty_books):
    seed_books(empty_books)
    seed_books(empty_books, SEED_BOOKS[:2], drop=False)
    assert empty_books.count_documents({}) == len(SEED_BOOKS) + 2


def test_seed_books_rejects_invalid_entry_before_writing(books):
    bad = [{"title": "Cheap", "author": "X", "genre": "Y", "published_year": 2000, "price": -1}]

    with pytest.raises(ValidationError):
        seed_books(books, bad)

    assert books.count_documents({}) == len(SEED_BOOKS)


def test_book_defaults_in_stock():
    book = Book(title="T", author="A", genre="G", published_year=1999, price=1.5)
    assert book.model_dump()["in_stock"] is True


def test_seed_books_failed_insert_keeps_previous_contents(books, monkeypatch):
    def refuse(documents, *args, **kwargs):
        raise BulkWriteError({"writeErrors": [{"index": 0, "errmsg": "duplicate key"}]})

    monkeypatch.setattr(books, "insert_many", refuse)

    with pytest.raises(BulkWriteError):
        seed_books(books)

    assert books.count_documents({}) == len(SEED_BOOKS)


def test_main_seeds_configured_collection(mongo_client, monkeypatch, capsys):
    monkeypatch.setattr(seed, "connect_to_cluster", lambda uri: mongo_client)

    seed.main()

    target = mongo_client[seed.DATABASE_NAME][seed.COLLECTION_NAME]
    assert target.count_documents({}) == len(SEED_BOOKS)
    assert f"Inserted {len(SEED_BOOKS)} books" in capsys.readouterr().out


def test_main_logs_and_exits_on_database_error(mongo_client, monkeypatch, caplog):
    closed = []
    monkeypatch.setattr(mongo_client, "close", lambda: closed.append(True))
    monkeypatch.setattr(seed, "connect_to_cluster", lambda uri: mongo_client)

    def unauthorized(collection):
        raise OperationFailure("not authorized on plp_bookstore to execute command")

    monkeypatch.setattr(seed, "seed_books", unauthorized)

    with pytest.raises(SystemExit) as exc_info:
        seed.main()

    assert exc_info.value.code == 1
    assert "Seeding failed: not authorized" in caplog.text
    assert closed == [True]


def test_main_logs_and_exits_on_connection_error(monkeypatch, caplog):
    def unreachable(uri):
        raise ConnectionError("Connection timed out.")

    monkeypatch.setattr(seed, "connect_to_cluster", unreachable)

    with pytest.raises(SystemExit) as exc_info:
        seed.main()

    assert exc_info.value.code == 1
    assert "Seeding failed: Connection timed out." in caplog.text
