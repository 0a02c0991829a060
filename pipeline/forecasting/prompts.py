"""
Prompt builders for the two generation requests.

Both prompts describe the same record shape so one parser handles either
response.
"""

import json
from datetime import date, timedelta
from typing import Iterable, List, Optional

from pipeline.ingestion.records import AirQualityRecord, AirQualityStatus

WINDOW_DAYS = 30
FORECAST_HISTORY_LIMIT = 40

_STATUS_CHOICES = " | ".join(s.value for s in AirQualityStatus)

RECORD_SHAPE = (
    "Use the following structure for each entry: "
    '[ { "Date": "YYYY-MM-DD", "PollutionIndex": number, '
    f'"AirQualityStatus": "{_STATUS_CHOICES}", '
    '"Latitude": number, "Longitude": number, "AIPredictionAccuracy": number } ]. '
)

JSON_ONLY = "Output ONLY valid JSON without any additional explanations."


def forecast_history(records: Optional[Iterable[AirQualityRecord]],
                     limit: int = FORECAST_HISTORY_LIMIT) -> List[dict]:
    """Latest ``limit`` records by date, reduced to date and pollution index."""
    latest = sorted(records or [], key=lambda r: r.date, reverse=True)[:limit]
    return [
        {"Date": r.date.isoformat(), "PollutionIndex": r.pollution_index}
        for r in latest
    ]


def current_trends_prompt(location: str, today: date) -> str:
    start = today - timedelta(days=WINDOW_DAYS)
    return (
        "You are an AI model specialized in air pollution forecasting and environmental analysis. "
        f"Your task is to generate a realistic dataset for the past {WINDOW_DAYS} days "
        f"({start.isoformat()} to {today.isoformat()}) "
        f"for the specified location, {location}. The data should include daily air quality trends. "
        + RECORD_SHAPE
        + "Base the predictions on historical data trends, ensuring the dataset includes "
        "day-to-day fluctuations and avoids a uniform increase or decrease. "
        f"The provided latitude and longitude values must represent {location}'s geographical coordinates. "
        + JSON_ONLY
    )


def forecast_prompt(history: List[dict], today: date) -> str:
    end = today + timedelta(days=WINDOW_DAYS)
    return (
        "You are an AI model specialized in air pollution forecasting. "
        "Based on the provided historical data, generate an accurate prediction "
        f"for air quality trends over the next {WINDOW_DAYS} days "
        f"({today.isoformat()} to {end.isoformat()}). "
        f"Using the following historical dataset, predict the Pollution Index for the next {WINDOW_DAYS} days:\n\n"
        f"{json.dumps(history)}\n\n"
        + RECORD_SHAPE
        + JSON_ONLY
    )
