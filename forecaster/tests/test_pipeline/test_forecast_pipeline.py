"""Tests for the forecast pipeline with mocked httpx."""

import json
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from forecaster.errors import EXIT_NETWORK, EXIT_OK, EXIT_RESPONSE, NetworkError
from forecaster.ingest.yandex_client import YandexWeatherClient
from forecaster.pipeline.forecast_pipeline import ForecastPipeline

FORECAST_URL = "https://test-yandex.example.com/v2/forecast"
PARAMS = {"lat": "55.750000", "lon": "37.620000", "limit": "3"}


class TestForecastPipeline:
    @respx.mock
    def test_success_output(self, config, forecast_payload: dict, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        result = ForecastPipeline(config).run()
        assert result == EXIT_OK

        out = capsys.readouterr().out
        assert "HTTP status: 200" in out
        assert '"temp_avg"' in out
        assert "Current temperature: 5°C" in out
        assert "2026-10-19: 0°C" in out
        assert "2026-10-20: 4°C" in out
        assert "2026-10-21: 8°C" in out
        assert "Average temperature over 3 day(s): 4.0°C" in out

    @respx.mock
    def test_raw_body_printed_verbatim(self, config, capsys):
        body = '{"fact":{"temp":1},"forecasts":[]}'
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, text=body)
        )

        ForecastPipeline(config).run()
        assert body in capsys.readouterr().out.splitlines()

    @respx.mock
    def test_no_raw(self, config, forecast_payload: dict, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        ForecastPipeline(config, show_raw=False).run()
        out = capsys.readouterr().out
        assert "HTTP status" not in out
        assert out.startswith("Current temperature: 5°C")

    @respx.mock
    def test_json_output(self, config, forecast_payload: dict, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        result = ForecastPipeline(config, output_format="json").run()
        assert result == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["current_temp"] == 5
        assert data["average_temp"] == 4.0

    @respx.mock
    def test_empty_forecasts(self, config, forecast_payload: dict, capsys):
        forecast_payload["forecasts"] = []
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, json=forecast_payload)
        )

        result = ForecastPipeline(config).run()
        assert result == EXIT_OK
        out = capsys.readouterr().out
        assert "No forecast data" in out
        assert "Average" not in out

    @respx.mock
    def test_timeout(self, config, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(side_effect=httpx.ConnectTimeout)

        result = ForecastPipeline(config).run()
        assert result == EXIT_NETWORK
        captured = capsys.readouterr()
        assert "timed out" in captured.err
        assert "Current temperature" not in captured.out

    @respx.mock
    def test_error_status_reports_shape_error(self, config, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(403, json={"message": "Forbidden"})
        )

        result = ForecastPipeline(config).run()
        assert result == EXIT_RESPONSE
        captured = capsys.readouterr()
        assert "HTTP status: 403" in captured.out
        assert "Forbidden" in captured.out
        assert "unexpected response shape (HTTP 403)" in captured.err

    @respx.mock
    def test_malformed_body(self, config, capsys):
        respx.get(FORECAST_URL, params=PARAMS).mock(
            return_value=httpx.Response(200, text="not json")
        )

        result = ForecastPipeline(config).run()
        assert result == EXIT_RESPONSE
        assert "not valid JSON" in capsys.readouterr().err

    def test_interrupted_request(self, config, capsys):
        client = MagicMock(spec=YandexWeatherClient)
        client.get_forecast.side_effect = KeyboardInterrupt

        result = ForecastPipeline(config, client=client).run()
        assert result == EXIT_NETWORK
        captured = capsys.readouterr()
        assert "request interrupted" in captured.err
        assert "Current temperature" not in captured.out

    def test_uses_given_client(self, config, capsys):
        client = MagicMock(spec=YandexWeatherClient)
        client.get_forecast.side_effect = NetworkError("Request failed: boom")

        result = ForecastPipeline(config, client=client).run()
        assert result == EXIT_NETWORK
        client.get_forecast.assert_called_once_with(55.75, 37.62, 3)
        assert "boom" in capsys.readouterr().err


@pytest.mark.parametrize(
    "temps, expected",
    [([1, 2], "1.5"), ([-1, -2, -2], "-1.7"), ([10], "10.0")],
)
@respx.mock
def test_average_line(config, forecast_payload: dict, capsys, temps, expected):
    forecast_payload["forecasts"] = [
        {"date": f"2026-10-{19 + i}", "parts": {"day": {"temp_avg": t}}}
        for i, t in enumerate(temps)
    ]
    respx.get(FORECAST_URL, params=PARAMS).mock(
        return_value=httpx.Response(200, json=forecast_payload)
    )

    ForecastPipeline(config).run()
    out = capsys.readouterr().out
    assert f"Average temperature over {len(temps)} day(s): {expected}°C" in out
