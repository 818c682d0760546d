import math

import pytest
from bson import ObjectId

from book import Book, DocumentDecodeError, InvalidBookId, InvalidCost, parse_book_id, parse_cost
from user import User


def test_new_book_document_has_no_id():
    doc = Book("Dune", "Herbert", 9.99).to_document()
    assert doc == {"name": "Dune", "author": "Herbert", "cost": 9.99}


def test_book_from_document():
    oid = ObjectId()
    book = Book.from_document({"_id": oid, "name": "Dune", "author": "Herbert", "cost": 10})
    assert book.id == oid
    assert book.id_str == str(oid)
    assert isinstance(book.cost, float)
    assert book.cost == 10.0


def test_book_from_document_missing_fields():
    book = Book.from_document({"_id": ObjectId()})
    assert book.name == ""
    assert book.author == ""
    assert book.cost == 0.0


@pytest.mark.parametrize(
    "doc",
    [
        {"_id": "abc", "name": "X", "author": "Y", "cost": 1.0},
        {"name": 1, "author": "Y", "cost": 1.0},
        {"name": "X", "author": "Y", "cost": "1.0"},
        {"name": "X", "author": "Y", "cost": True},
    ],
)
def test_book_from_bad_document(doc):
    with pytest.raises(DocumentDecodeError):
        Book.from_document(doc)


def test_user_document_field_names():
    user = User("Ada", "ada@example.com", "secret")
    assert user.to_document() == {"name": "Ada", "email": "ada@example.com", "password": "secret"}


def test_user_from_bad_document():
    with pytest.raises(DocumentDecodeError):
        User.from_document({"name": "Ada", "email": 5, "password": "x"})


@pytest.mark.parametrize("raw, expected", [("12.50", 12.5), ("9.99", 9.99), ("0", 0.0), ("1e2", 100.0)])
def test_parse_cost(raw, expected):
    assert math.isclose(parse_cost(raw), expected)


@pytest.mark.parametrize("raw", ["abc", "", None, "-1", "nan", "inf", "12,50", " 9.99 ", "1_000", "١٢", "1e999"])
def test_parse_cost_rejects(raw):
    with pytest.raises(InvalidCost):
        parse_cost(raw)


def test_parse_book_id():
    oid = ObjectId()
    assert parse_book_id(str(oid)) == oid


@pytest.mark.parametrize("raw", ["", None, "xyz", "123456789012", "zz" * 12])
def test_parse_book_id_rejects(raw):
    with pytest.raises(InvalidBookId):
        parse_book_id(raw)


def test_book_from_document_null_fields():
    book = Book.from_document({"_id": ObjectId(), "name": None, "author": None, "cost": None})
    assert book.name == ""
    assert book.author == ""
    assert book.cost == 0.0


def test_user_from_document_null_fields():
    user = User.from_document({"name": None, "email": "ada@example.com", "password": "secret"})
    assert user.name == ""
