"""Exceptions for the fh.db MongoDB shim."""

from __future__ import annotations


class FhDbError(Exception):
    """Root exception for the fh.db shim."""


class DescriptorValidationError(FhDbError):
    """Raised synchronously when a descriptor lacks ``act`` or ``type``."""


class ParameterError(FhDbError):
    """Raised when an action's parameters are missing or malformed.

    Delivered through the result channel, never raised from ``perform()``.
    """


class CollectionNameTooLongError(ParameterError):
    """Raised when ``type`` exceeds the maximum collection name length."""

    def __init__(self, type_name: str, max_length: int) -> None:
        self.type_name = type_name
        self.max_length = max_length
        super().__init__(
            f"Error: 'type' name too long: '{type_name}'. "
            f"Collection name cannot be greater than: {max_length}"
        )


class QueryBuildError(ParameterError):
    """Raised when an operator group cannot be compiled to a filter."""


class UnknownActionError(FhDbError):
    """Raised when ``act`` does not name a supported action."""

    def __init__(self, act: object) -> None:
        self.act = act
        super().__init__("Unknown fh.db action")


class MongoPersistenceError(FhDbError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""
