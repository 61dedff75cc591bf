"""
Domain exceptions.

Inside a background job every one of these ends up as the job's `error`
string. On the synchronous paths they propagate to the API layer, which maps
each class to an HTTP status in api/main.py.
"""


class ExtractorError(Exception):
    """Base class for every error this service raises on purpose."""


class StoryNotFoundError(ExtractorError):
    """No story in the Storybook index matches the requested component."""


class UnknownOperationError(ExtractorError):
    """A job was submitted for an operation nobody registered."""


class OperationTimeoutError(ExtractorError):

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Operation timed out after {timeout_ms}ms")


class StorybookFetchError(ExtractorError):
    """The Storybook server could not be reached or returned an error."""
