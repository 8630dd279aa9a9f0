"""Custom exceptions for the Werewolf game master."""


class WGMException(Exception):
    """Base exception for all game master errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidTransitionError(WGMException):
    """Raised when a phase transition is requested from the wrong state."""

    pass


class PhaseInProgressError(InvalidTransitionError):
    """Raised when start/advance is called while another one is running."""

    pass


class InvalidActionError(WGMException):
    """Raised when an invalid action is attempted."""

    pass


class AgentError(WGMException):
    """Raised when an agent fails or behaves incorrectly."""

    pass


class ConfigurationError(WGMException):
    """Raised when configuration is invalid."""

    pass


class TranscriptError(WGMException):
    """Raised when a game transcript cannot be saved or loaded."""

    pass
