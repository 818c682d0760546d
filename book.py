from __future__ import annotations

import math
import re

from bson import ObjectId
from bson.errors import InvalidId


# Plain ASCII decimal, no padding or digit separators
COST_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class DocumentDecodeError(ValueError):
    """A stored document does not have the shape of the entity."""


class InvalidBookId(ValueError):
    pass


class InvalidCost(ValueError):
    pass


def decode_str(data: dict, field: str) -> str:
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DocumentDecodeError(f"Field '{field}' must be a string, got {type(value).__name__}")
    return value


def parse_book_id(raw: str | None) -> ObjectId:
    """Parse the 24-character hex form of a book id."""
    if not raw:
        raise InvalidBookId("Book ID is required.")
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError) as e:
        raise InvalidBookId(f"'{raw}' is not a valid book ID.") from e


def parse_cost(raw: str | None) -> float:
    """Parse a cost form value. Only finite, non-negative numbers are accepted."""
    if raw is None:
        raise InvalidCost("Cost is required.")
    if not COST_PATTERN.fullmatch(raw):
        raise InvalidCost(f"'{raw}' is not a number.")
    try:
        cost = float(raw)
    except ValueError as e:
        raise InvalidCost(f"'{raw}' is not a number.") from e
    if not math.isfinite(cost) or cost < 0:
        raise InvalidCost(f"'{raw}' is not a valid cost.")
    return cost


class Book:
    """A single book in the catalog."""

    def __init__(self, name: str, author: str, cost: float, id: ObjectId | None = None) -> None:
        self.id = id
        self.name = name
        self.author = author
        self.cost = cost

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, name={self.name!r}, author={self.author!r}, cost={self.cost!r})"

    @property
    def id_str(self) -> str:
        return str(self.id) if self.id is not None else ""

    def to_document(self) -> dict:
        doc = {"name": self.name, "author": self.author, "cost": self.cost}
        # Leave _id out so the store generates one
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    def fields_document(self) -> dict:
        """Mutable fields only, for a ``$set`` update."""
        return {"name": self.name, "author": self.author, "cost": self.cost}

    @staticmethod
    def from_document(data: dict) -> "Book":
        book_id = data.get("_id")
        if book_id is not None and not isinstance(book_id, ObjectId):
            raise DocumentDecodeError(f"Book _id must be an ObjectId, got {type(book_id).__name__}")

        cost = data.get("cost")
        if cost is None:
            cost = 0.0
        # bool is an int subclass; a stored true/false is not a cost
        if isinstance(cost, bool) or not isinstance(cost, (int, float)):
            raise DocumentDecodeError(f"Field 'cost' must be a number, got {type(cost).__name__}")

        return Book(
            id=book_id,
            name=decode_str(data, "name"),
            author=decode_str(data, "author"),
            cost=float(cost),
        )
