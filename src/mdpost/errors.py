"""Exception hierarchy for post creation, publishing and rendering"""


class MdpostError(Exception):
    """Base exception for all mdpost errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InputError(MdpostError):
    """Raised when a call is missing the input it needs (no content, no slug or title)."""


class ConfigurationError(MdpostError):
    """Raised when site configuration cannot satisfy a request (e.g. no usable scaffold)."""


class NotFoundError(MdpostError):
    """Raised when a user-named resource does not exist."""


class DraftNotFoundError(NotFoundError):
    """No file under the drafts directory matches the requested slug."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f'Draft "{slug}" does not exist.')


class FrontMatterError(MdpostError, ValueError):
    """Front matter text could not be parsed into a mapping."""


class ConsistencyError(MdpostError, AssertionError):
    """A placeholder references an escape table slot that was never filled or was already restored."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        super().__init__(f"Escape table slot {index} {reason}")
