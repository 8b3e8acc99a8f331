"""Output formatters for forecast reports."""

import json

from forecaster.models.forecast import ForecastReport


def format_response_header(status_code: int, body: str) -> str:
    """Status line plus the raw body, for diagnostics."""
    return "\n".join([
        f"HTTP status: {status_code}",
        "Raw JSON response:",
        body,
    ])


def format_report_text(report: ForecastReport) -> str:
    """Plain text report for the console."""
    lines = [
        f"Current temperature: {report.current_temp}°C",
        "",
        "Forecast for the coming days:",
    ]
    for day in report.days:
        lines.append(f"{day.date}: {day.temp_avg}°C")

    average = report.average_temp
    lines.append("")
    if average is None:
        lines.append("No forecast data")
    else:
        lines.append(
            f"Average temperature over {len(report.days)} day(s): {average:.1f}°C"
        )
    return "\n".join(lines)


def format_report_json(report: ForecastReport) -> str:
    """JSON report for programmatic consumption."""
    average = report.average_temp
    data = {
        "current_temp": report.current_temp,
        "forecasts": [
            {"date": d.date, "temp_avg": d.temp_avg} for d in report.days
        ],
        "average_temp": round(average, 1) if average is not None else None,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
