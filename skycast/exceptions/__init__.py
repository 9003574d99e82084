"""Weather service exceptions."""

from .common import (
    WeatherServiceException,
    ConfigurationError,
    ValidationError,
    UpstreamDomainError,
    CityNotFoundError,
    InvalidCredentialError,
    UpstreamTransportError,
    UpstreamStatusError,
)

__all__ = [
    "WeatherServiceException",
    "ConfigurationError",
    "ValidationError",
    "UpstreamDomainError",
    "CityNotFoundError",
    "InvalidCredentialError",
    "UpstreamTransportError",
    "UpstreamStatusError",
]
