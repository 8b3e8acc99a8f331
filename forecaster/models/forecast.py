"""Yandex forecast data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DayForecast:
    date: str  # YYYY-MM-DD
    temp_avg: int  # average daytime temperature, °C


@dataclass(frozen=True)
class ForecastReport:
    current_temp: int  # °C
    days: list[DayForecast]

    @property
    def average_temp(self) -> float | None:
        """Mean of the per-day averages, or None when there are no days."""
        if not self.days:
            return None
        return sum(d.temp_avg for d in self.days) / len(self.days)
