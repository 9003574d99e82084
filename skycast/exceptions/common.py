from typing import Optional

from skycast.definitions.data_sources import (
    PASSTHROUGH_STATUS_CODES,
    BAD_GATEWAY_STATUS,
    ErrorMessage,
)


class WeatherServiceException(Exception):
    """Base exception for weather service.

    Every subclass carries the HTTP status the aggregator answers with
    and a message that is safe to show to the end user.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = str(message)
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(WeatherServiceException):
    """Raised when the upstream credential is not configured."""

    status_code = 500

    def __init__(self, message: str = ErrorMessage.MISSING_API_KEY):
        super().__init__(message)


class ValidationError(WeatherServiceException):
    """Raised when validation fails."""

    status_code = 400

    def __init__(self, message: str = ErrorMessage.CITY_REQUIRED):
        super().__init__(message)


class UpstreamDomainError(WeatherServiceException):
    """Raised when the provider explicitly rejects the query."""


class CityNotFoundError(UpstreamDomainError):
    status_code = 404

    def __init__(self, message: str = ErrorMessage.CITY_NOT_FOUND):
        super().__init__(message)


class InvalidCredentialError(UpstreamDomainError):
    status_code = 401

    def __init__(self, message: str = ErrorMessage.INVALID_API_KEY):
        super().__init__(message)


class UpstreamTransportError(WeatherServiceException):
    """Raised when the provider cannot be reached or answers garbage."""

    status_code = BAD_GATEWAY_STATUS

    def __init__(self, message: str = ErrorMessage.UPSTREAM_DISRUPTION):
        super().__init__(message)


class UpstreamStatusError(UpstreamTransportError):
    """Raised for a non-success upstream status other than 401/404."""

    def __init__(self, upstream_status: int, upstream_message: Optional[str] = None):
        self.upstream_status = upstream_status
        super().__init__(upstream_message or ErrorMessage.FETCH_FAILED)
        self.status_code = (
            upstream_status
            if upstream_status in PASSTHROUGH_STATUS_CODES
            else BAD_GATEWAY_STATUS
        )
