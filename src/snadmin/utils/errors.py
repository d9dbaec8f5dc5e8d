"""Custom exceptions for snadmin."""


class SnadminError(Exception):
    """Base exception for all snadmin errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.suggestion = suggestion


class ConfigError(SnadminError):
    """Configuration-related errors."""

    pass


class MissingCredentialError(ConfigError):
    """Required environment variable is not set."""

    pass


class ValidationError(SnadminError):
    """User input failed validation."""

    pass


class InvalidFieldError(ValidationError):
    """Update target is not an updatable episode field."""

    pass


class CoercionError(ValidationError):
    """Raw value could not be converted for its field."""

    pass


class InvalidDurationError(CoercionError):
    """Duration is not in [[HH:]MM:]SS form."""

    pass


class InvalidDateError(CoercionError):
    """Date is not a valid YYYY-MM-DD HH:MM timestamp."""

    pass


class TimezoneUnavailableError(CoercionError):
    """Local UTC offset could not be determined."""

    pass


class NetworkError(SnadminError):
    """Transport or HTTP status failure talking to the API."""

    pass


class NotFoundError(NetworkError):
    """Requested resource does not exist (HTTP 404)."""

    pass


class MalformedResponseError(NetworkError):
    """Response body is not the expected JSON shape."""

    pass


class DownloadError(SnadminError):
    """Media file could not be written locally."""

    pass
