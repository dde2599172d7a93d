"""Custom exceptions for the lessonmarket application."""


class LessonMarketException(Exception):
    """Base exception for lessonmarket application."""

    pass


class ValidationError(LessonMarketException):
    """Raised when validation fails."""

    pass


class NotFoundError(LessonMarketException):
    """Raised when a resource is not found."""

    pass


class BadRequestError(LessonMarketException):
    """Raised when a caller asks for something the domain does not allow."""

    pass


class InvalidTransitionError(BadRequestError):
    """Raised when a status transition is not defined for the current status."""

    def __init__(self, message: str, current_status: str | None = None, transition: str | None = None) -> None:
        super().__init__(message)
        self.current_status = current_status
        self.transition = transition


class ConfigurationError(LessonMarketException):
    """Raised when configuration is invalid."""

    pass
