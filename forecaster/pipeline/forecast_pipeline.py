"""Forecast pipeline: one request, one parse, one report."""

import logging
import sys

from forecaster.config.schema import ForecastConfig
from forecaster.errors import EXIT_NETWORK, EXIT_OK, NetworkError, ResponseShapeError
from forecaster.ingest.forecast_parser import parse_forecast_body
from forecaster.ingest.yandex_client import YandexWeatherClient
from forecaster.reporting.formatters import (
    format_report_json,
    format_report_text,
    format_response_header,
)

logger = logging.getLogger(__name__)


class ForecastPipeline:
    def __init__(
        self,
        config: ForecastConfig,
        client: YandexWeatherClient | None = None,
        *,
        output_format: str = "text",
        show_raw: bool = True,
    ):
        self.config = config
        self.client = client or YandexWeatherClient.from_config(config)
        self.output_format = output_format
        self.show_raw = show_raw

    def run(self) -> int:
        """Fetch, print and summarize the forecast. Returns an exit code."""
        try:
            resp = self.client.get_forecast(
                self.config.latitude, self.config.longitude, self.config.days
            )
        except NetworkError as e:
            print(f"Error: {e}", file=sys.stderr)
            return e.exit_code
        except KeyboardInterrupt:
            logger.warning("Forecast request interrupted")
            print("Error: request interrupted", file=sys.stderr)
            return EXIT_NETWORK

        body = resp.text
        if self.output_format == "text" and self.show_raw:
            print(format_response_header(resp.status_code, body))
        if not resp.is_success:
            logger.warning("Forecast request returned HTTP %d", resp.status_code)

        try:
            report = parse_forecast_body(body)
        except ResponseShapeError as e:
            print(
                f"Error: unexpected response shape (HTTP {resp.status_code}): {e}",
                file=sys.stderr,
            )
            return e.exit_code

        if self.output_format == "json":
            print(format_report_json(report))
        else:
            if self.show_raw:
                print()
            print(format_report_text(report))

        logger.info(
            "Reported %d forecast day(s), current temp %d°C",
            len(report.days), report.current_temp,
        )
        return EXIT_OK
