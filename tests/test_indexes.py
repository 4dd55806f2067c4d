import indexes


def test_create_title_index(books):
    assert indexes.create_title_index(books) == "title_1"
    assert "title_1" in books.index_information()


def test_create_author_year_index(books):
    assert indexes.create_author_year_index(books) == "author_1_published_year_1"
    info = books.index_information()["author_1_published_year_1"]
    assert info["key"] == [("author", 1), ("published_year", 1)]


def test_index_creation_is_idempotent(books):
    indexes.create_title_index(books)
    indexes.create_author_year_index(books)
    first = set(books.index_information())

    indexes.create_title_index(books)
    indexes.create_author_year_index(books)

    assert set(books.index_information()) == first
    assert first == {"_id_", "title_1", "author_1_published_year_1"}


def test_get_collection_indexes(books):
    indexes.create_title_index(books)

    described = {idx["name"]: idx for idx in indexes.get_collection_indexes(books)}

    assert set(described) == {"_id_", "title_1"}
    assert described["title_1"]["keys"] == [("title", 1)]
    assert described["title_1"]["unique"] is False
