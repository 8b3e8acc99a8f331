"""Forecast parser: turns a Yandex /v2/forecast body into a ForecastReport."""

import json
import logging
from typing import Any

from forecaster.errors import ResponseShapeError
from forecaster.models.forecast import DayForecast, ForecastReport

logger = logging.getLogger(__name__)


def parse_forecast_body(text: str) -> ForecastReport:
    """Decode a raw response body and extract the report."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseShapeError(f"Response body is not valid JSON: {e}") from e
    return parse_forecast(payload)


def parse_forecast(payload: Any) -> ForecastReport:
    """Extract current temperature and per-day averages from a decoded body."""
    if not isinstance(payload, dict):
        raise ResponseShapeError("Expected a JSON object at the top level")

    fact = _require_dict(payload, "fact", "fact")
    current_temp = _require_int(fact, "temp", "fact.temp")

    forecasts = payload.get("forecasts")
    if not isinstance(forecasts, list):
        raise ResponseShapeError("Missing or invalid field: forecasts")

    days: list[DayForecast] = []
    for i, entry in enumerate(forecasts):
        path = f"forecasts[{i}]"
        if not isinstance(entry, dict):
            raise ResponseShapeError(f"Missing or invalid field: {path}")
        date = entry.get("date")
        if not isinstance(date, str) or not date:
            raise ResponseShapeError(f"Missing or invalid field: {path}.date")
        parts = _require_dict(entry, "parts", f"{path}.parts")
        day = _require_dict(parts, "day", f"{path}.parts.day")
        days.append(
            DayForecast(
                date=date,
                temp_avg=_require_int(day, "temp_avg", f"{path}.parts.day.temp_avg"),
            )
        )

    if not days:
        logger.warning("Response contained no forecast entries")
    return ForecastReport(current_temp=current_temp, days=days)


def _require_dict(obj: dict, key: str, path: str) -> dict:
    value = obj.get(key)
    if not isinstance(value, dict):
        raise ResponseShapeError(f"Missing or invalid field: {path}")
    return value


def _require_int(obj: dict, key: str, path: str) -> int:
    value = obj.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ResponseShapeError(f"Missing or invalid field: {path}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ResponseShapeError(f"Expected an integer at {path}, got {value}")
        return int(value)
    return value
