"""Exceptions raised by the blog API."""


class BlogApiError(Exception):
    """Base class for blog API errors."""


class ValidationFailure(BlogApiError):
    """A request body is missing a required field or has the wrong shape."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class StoreUnavailable(BlogApiError):
    """The database could not be reached or the handle is not open."""
