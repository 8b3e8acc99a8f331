"""Yandex Weather forecast API client."""

import logging
import time

import httpx

from forecaster.config.schema import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ForecastConfig
from forecaster.errors import NetworkError

logger = logging.getLogger(__name__)

FORECAST_PATH = "/v2/forecast"
API_KEY_HEADER = "X-Yandex-Weather-Key"


def build_forecast_url(
    base_url: str, latitude: float, longitude: float, days: int
) -> str:
    """Build the forecast URL.

    Coordinates are rendered with a fixed six-digit, period-separated format
    (``55.750000``); str.format never consults the process locale.
    """
    return (
        f"{base_url.rstrip('/')}{FORECAST_PATH}"
        f"?lat={latitude:f}&lon={longitude:f}&limit={days:d}"
    )


class YandexWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        connect_timeout: float = 10.0,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: ForecastConfig) -> "YandexWeatherClient":
        return cls(
            api_key=config.api_key,
            base_url=config.http.base_url,
            connect_timeout=config.http.connect_timeout_seconds,
            timeout=config.http.timeout_seconds,
            user_agent=config.http.user_agent,
        )

    def get_forecast(self, latitude: float, longitude: float, days: int) -> httpx.Response:
        """Fetch the forecast for one point.

        The response is returned whatever its status code so the caller can
        show the body. The key travels only in the request header.

        ``timeout`` bounds each connect/read/write and also the whole call,
        body transfer included: the body is streamed and the call fails once
        ``timeout`` seconds have passed since it started.
        """
        url = build_forecast_url(self.base_url, latitude, longitude, days)
        headers = {API_KEY_HEADER: self.api_key, "User-Agent": self.user_agent}
        timeout = httpx.Timeout(self.timeout, connect=self.connect_timeout)
        deadline = time.monotonic() + self.timeout

        logger.info("GET %s", url)
        try:
            with httpx.stream("GET", url, headers=headers, timeout=timeout) as stream:
                chunks: list[bytes] = []
                for chunk in stream.iter_bytes():
                    chunks.append(chunk)
                    self._check_deadline(deadline)
                self._check_deadline(deadline)
                resp = _buffered_response(stream, b"".join(chunks))
        except httpx.TimeoutException as e:
            logger.error("Yandex Weather request timed out: %s", e)
            raise NetworkError(f"Request timed out ({type(e).__name__})") from e
        except httpx.RequestError as e:
            logger.error("Yandex Weather request failed: %s", e)
            raise NetworkError(f"Request failed: {e}") from e

        logger.info("Yandex Weather returned %d (%d bytes)", resp.status_code, len(resp.content))
        return resp

    def _check_deadline(self, deadline: float) -> None:
        if time.monotonic() > deadline:
            logger.error("Yandex Weather response exceeded %.1fs total", self.timeout)
            raise NetworkError(
                f"Request timed out (no complete response within {self.timeout:g}s)"
            )


def _buffered_response(stream: httpx.Response, content: bytes) -> httpx.Response:
    # iter_bytes() has already undone any Content-Encoding; keep only the
    # content type so .text still finds the charset.
    headers = {}
    if "content-type" in stream.headers:
        headers["content-type"] = stream.headers["content-type"]
    return httpx.Response(
        stream.status_code,
        headers=headers,
        content=content,
        request=stream.request,
    )
