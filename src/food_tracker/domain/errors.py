"""Domain errors raised by the food tracker core."""


class ParseError(Exception):
    """Model reply could not be read as the expected structure."""


class AnalysisError(Exception):
    """Food image analysis failed."""

    USER_MESSAGE = "Failed to analyze the food image. Please try again."


class PersistenceError(Exception):
    """A log or profile operation failed in the store."""


class NotFoundError(Exception):
    """Record does not exist or belongs to another user."""
