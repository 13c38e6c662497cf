"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class UpstreamUnavailableError(ApplicationError):
    """Raised when the directory or token endpoint cannot be reached or authenticated."""


class ChannelDeliveryError(ApplicationError):
    """Raised when a notification channel fails to deliver."""

    def __init__(self, channel: str, reason: str) -> None:
        super().__init__(f"{channel}: {reason}")
        self.channel = channel
        self.reason = reason


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
