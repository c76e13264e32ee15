"""Shared exceptions for service layer operations."""


class UniqueConstraintError(Exception):
    """
    Raised by the store layer when an insert or update violates a unique constraint.

    `field` names the column that collided. It is for internal routing only and
    must not be echoed back to clients.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unique constraint violated on '{field}'")


class CredentialsTakenError(Exception):
    """Raised when registering (or changing to) an email that already belongs to an account."""

    def __init__(self) -> None:
        super().__init__("Credentials taken")


class CredentialsIncorrectError(Exception):
    """
    Raised when login fails.

    Unknown email and wrong password produce the same message so a caller
    cannot probe which accounts exist.
    """

    def __init__(self) -> None:
        super().__init__("Credentials incorrect")


class BookmarkNotFoundError(Exception):
    """Raised when a bookmark does not exist or belongs to another user."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("This bookmark does not exist in your library")
