"""
Error taxonomy for the query layer.

Empty results (no posts, no meta, no thumbnail) are values, not errors.
Only required single-entity lookups raise NotFoundError.
"""
from typing import Any


class WordPressDataError(Exception):
    """Base class for all query layer errors"""

    pass


class NotFoundError(WordPressDataError):
    """Raised when a single-entity lookup matches no row"""

    def __init__(self, entity: str, lookup: Any):
        self.entity = entity
        self.lookup = lookup
        super().__init__(f"{entity} not found: {lookup!r}")


class ConfigurationError(WordPressDataError):
    """Raised when connection settings are missing or malformed"""

    pass


class QueryValidationError(WordPressDataError):
    """Raised when a caller passes an argument of the wrong shape, before any I/O"""

    pass
