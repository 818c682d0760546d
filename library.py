import logging
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from book import Book, DocumentDecodeError
from database import Store
from user import User

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store operation failed. The message is safe to show to the client."""


class Library:
    """Users and the book catalog. Every call is exactly one store operation."""

    def __init__(self, store: Store) -> None:
        self.store = store

    # ------------------------- Users ------------------------- #
    def signup(self, name: str, email: str, password: str) -> User:
        """Insert a new user. Duplicate emails are accepted."""
        user = User(name=name, email=email, password=password)
        try:
            self.store.users.insert_one(user.to_document())
        except PyMongoError as e:
            logger.error(f"Failed to insert user {email!r}: {e}")
            raise StoreError("Error creating user") from e
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user whose email and password both match, or None.

        A matching document that cannot be decoded counts as no match.
        """
        try:
            doc = self.store.users.find_one({"email": email, "password": password})
        except PyMongoError as e:
            logger.error(f"User lookup failed: {e}")
            raise StoreError("Failed to look up user") from e
        if doc is None:
            return None
        try:
            return User.from_document(doc)
        except DocumentDecodeError as e:
            logger.error(f"Failed to decode user {doc.get('_id')}: {e}")
            return None

    # ------------------------- Books ------------------------- #
    def list_books(self) -> List[Book]:
        """All books in store order. One bad document fails the whole listing."""
        try:
            cursor = self.store.books.find({})
        except PyMongoError as e:
            logger.error(f"Book query failed: {e}")
            raise StoreError("Failed to retrieve books") from e

        books: List[Book] = []
        try:
            for doc in cursor:
                try:
                    books.append(Book.from_document(doc))
                except DocumentDecodeError as e:
                    logger.error(f"Failed to decode book {doc.get('_id')}: {e}")
                    raise StoreError("Failed to decode book") from e
        except PyMongoError as e:
            logger.error(f"Book cursor failed: {e}")
            raise StoreError("Failed to retrieve books") from e
        return books

    def add_book(self, name: str, author: str, cost: float) -> Book:
        book = Book(name=name, author=author, cost=cost)
        try:
            result = self.store.books.insert_one(book.to_document())
        except PyMongoError as e:
            logger.error(f"Failed to insert book {name!r}: {e}")
            raise StoreError("Failed to insert book") from e
        book.id = result.inserted_id
        return book

    def update_book(self, book_id: ObjectId, name: str, author: str, cost: float) -> bool:
        """Replace name, author and cost. Returns whether a book matched.

        An unknown id is not an error.
        """
        book = Book(name=name, author=author, cost=cost, id=book_id)
        try:
            result = self.store.books.update_one({"_id": book_id}, {"$set": book.fields_document()})
        except PyMongoError as e:
            logger.error(f"Failed to update book {book_id}: {e}")
            raise StoreError("Failed to update book") from e
        return result.matched_count > 0

    def remove_book(self, book_id: ObjectId) -> bool:
        """Delete the book if present. Returns whether anything was removed."""
        try:
            result = self.store.books.delete_one({"_id": book_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete book {book_id}: {e}")
            raise StoreError("Failed to delete book") from e
        return result.deleted_count > 0
