"""Error taxonomy for the BOS wagon."""


class WagonError(Exception):
    """Base class for every error raised by the wagon."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class AuthenticationError(WagonError):
    """Raised when a BOS client cannot be built from the supplied credentials."""

    def __init__(self, endpoint: str, reason: str, cause: Exception | None = None):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Could not authenticate against '{endpoint}': {reason}", cause)


class ResourceDoesNotExistError(WagonError):
    """Raised when a resource or key cannot be found in the repository."""

    def __init__(self, resource: str, cause: Exception | None = None, location: str | None = None):
        self.resource = resource
        self.location = location
        message = f"Could not find resource '{resource}'"
        if location:
            message = f"{message} {location}"
        super().__init__(message, cause)


class TransferFailedError(WagonError):
    """Raised when an upload or a listing fails."""

    def __init__(self, message: str, resource: str | None = None, cause: Exception | None = None):
        self.resource = resource
        super().__init__(message, cause)


class RepositoryConfigurationError(WagonError):
    """Raised when the repository location or the settings file is malformed."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid repository configuration '{value}': {reason}")
