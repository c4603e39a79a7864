"""
Fetcher exceptions.

Transport failures collapse into a single FetchError tagged with a
FetchErrorKind. The transport exception is kept as __cause__.
"""

from enum import StrEnum


class FetchErrorKind(StrEnum):
    """Category of a fetch failure."""

    CONNECTION = "connection"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    TRANSFER = "transfer"


class FetchError(Exception):
    """
    Failure reported by a resource fetcher.

    Attributes:
        kind: Which of the four failure categories this is.
        resource: Resource name for retrieval failures, None otherwise.
    """

    def __init__(self, message: str, kind: FetchErrorKind, resource: str | None = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.resource = resource

    @property
    def cause(self) -> BaseException | None:
        """The transport exception this error was raised from."""
        return self.__cause__

    @property
    def is_not_found(self) -> bool:
        return self.kind is FetchErrorKind.NOT_FOUND

    def __repr__(self) -> str:
        return f"<FetchError(kind={self.kind.value}, message={self.message!r})>"
