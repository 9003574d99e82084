from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from skycast.config import get_settings
from skycast.definitions.data_sources import UpstreamEndpoint
from skycast.exceptions import (
    CityNotFoundError,
    InvalidCredentialError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from skycast.models.weather import UpstreamErrorPayload
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


class WeatherAPIClient:
    """
    Thin async client for the OpenWeatherMap 2.5 API.

    Each call issues exactly one request; there is no retry and no caching.
    Requesting, status checking and decoding are separate steps so callers
    can await several requests before judging any of them.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        units: Optional[str] = None,
        lang: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        self.base_url = (base_url or settings.openweather_base_url).rstrip("/")
        self.units = units or settings.weather_units
        self.lang = lang or settings.weather_lang
        self.client = client or httpx.AsyncClient(timeout=settings.weather_api_timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def close(self):
        await self.client.aclose()

    async def request(self, endpoint: UpstreamEndpoint, city: str) -> httpx.Response:
        """
        Query one endpoint for a city.

        Raises:
            UpstreamTransportError: the request never produced a response
        """
        try:
            return await self.client.get(
                f"{self.base_url}/{endpoint.value}",
                params={
                    "q": city,
                    "appid": self.api_key,
                    "units": self.units,
                    "lang": self.lang,
                },
                headers={"Cache-Control": "no-store"},
            )
        except httpx.HTTPError as e:
            logger.error(
                "Weather provider unreachable",
                extra={
                    "event": "upstream_transport_error",
                    "endpoint": endpoint.value,
                    "city": city,
                    "error_type": type(e).__name__,
                },
            )
            raise UpstreamTransportError() from e

    def raise_for_status(
        self, endpoint: UpstreamEndpoint, city: str, response: httpx.Response
    ) -> None:
        """
        Translate a non-success upstream status into a domain error.

        Raises:
            CityNotFoundError: upstream answered 404
            InvalidCredentialError: upstream answered 401
            UpstreamStatusError: any other non-success status
        """
        if response.is_success:
            return

        status = response.status_code
        logger.warning(
            "Weather provider rejected request",
            extra={
                "event": "upstream_status_error",
                "endpoint": endpoint.value,
                "city": city,
                "status_code": status,
            },
        )

        if status == 404:
            raise CityNotFoundError()
        if status == 401:
            raise InvalidCredentialError()
        raise UpstreamStatusError(status, self._upstream_message(response))

    def decode(
        self, endpoint: UpstreamEndpoint, city: str, response: httpx.Response
    ) -> Dict[str, Any]:
        """
        Decode a successful response body.

        Raises:
            UpstreamTransportError: the body is not a JSON object
        """
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(
                "Weather provider returned a non-JSON body",
                extra={"event": "upstream_malformed", "endpoint": endpoint.value, "city": city},
            )
            raise UpstreamTransportError() from e

        if not isinstance(payload, dict):
            logger.error(
                "Weather provider returned an unexpected body",
                extra={"event": "upstream_malformed", "endpoint": endpoint.value, "city": city},
            )
            raise UpstreamTransportError()

        return payload

    @staticmethod
    def _upstream_message(response: httpx.Response) -> Optional[str]:
        try:
            payload = response.json()
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None
        try:
            return UpstreamErrorPayload(**payload).message
        except PydanticValidationError:
            return None
