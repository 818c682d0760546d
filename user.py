from __future__ import annotations

from book import decode_str


class User:
    """A registered reader. The store assigns the ``_id``; the app never reads it."""

    def __init__(self, name: str, email: str, password: str) -> None:
        self.name = name
        self.email = email
        # Stored and compared as given, no hashing
        self.password = password

    def __repr__(self) -> str:
        return f"User(name={self.name!r}, email={self.email!r})"

    def to_document(self) -> dict:
        return {"name": self.name, "email": self.email, "password": self.password}

    @staticmethod
    def from_document(data: dict) -> "User":
        return User(
            name=decode_str(data, "name"),
            email=decode_str(data, "email"),
            password=decode_str(data, "password"),
        )
