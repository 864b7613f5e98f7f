"""Custom exceptions for the mock timer feed."""

from __future__ import annotations


class MockTimerError(Exception):
    """Base exception for all mock timer errors."""


class DefinitionError(MockTimerError):
    """Raised when competitor or track definitions cannot be loaded."""


class SynthesisError(MockTimerError):
    """Raised when lap generation is invoked with invalid inputs."""


class FeedError(MockTimerError):
    """Base exception for feed client errors."""


class FeedConnectionError(FeedError):
    """Raised when the client cannot connect to the feed."""


class FeedTimeoutError(FeedError):
    """Raised when the feed does not answer a query in time."""


class FeedProtocolError(FeedError):
    """Raised when the feed answers a query with an error envelope."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Feed error: {message}")


class FeedValidationError(FeedError):
    """Raised when feed response data fails model validation."""
