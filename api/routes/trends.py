"""
Trends routes — current 30-day trends for a location and 30-day forecasts.

Both endpoints always answer 200 with data; when generation fails the body
carries the fallback dataset and the error that triggered it.
"""
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.dependencies import get_pipeline
from pipeline.forecasting.trend_pipeline import FetchOutcome, TrendPipeline
from pipeline.ingestion.records import AirQualityRecord
from pipeline.stats.summary import map_marker, summarize

router = APIRouter()

DEFAULT_LOCATION = "New York"


class ForecastRequest(BaseModel):
    history: List[AirQualityRecord] = []


def _outcome_body(outcome: FetchOutcome) -> dict:
    marker = map_marker(outcome.records)
    return {
        "source": outcome.source.value,
        "error": (
            {"kind": outcome.error.kind.value, "detail": outcome.error.detail}
            if outcome.error else None
        ),
        "records": [r.to_wire() for r in outcome.records],
        "summary": summarize(outcome.records).to_dict(),
        "marker": (
            {"latitude": marker[0], "longitude": marker[1]} if marker else None
        ),
    }


@router.get("")
@router.get("/", include_in_schema=False)
async def current_trends(
    location: str = Query(DEFAULT_LOCATION, min_length=1, pattern=r"\S"),
    pipeline: TrendPipeline = Depends(get_pipeline),
):
    """Generate the past 30 days of air quality for a location."""
    outcome = await pipeline.current_trends(location.strip())
    body = _outcome_body(outcome)
    body["location"] = location.strip()
    return body


@router.post("/forecast")
async def forecast(
    body: ForecastRequest,
    pipeline: TrendPipeline = Depends(get_pipeline),
):
    """Forecast the next 30 days from previously fetched records."""
    outcome = await pipeline.forecast(body.history)
    return _outcome_body(outcome)
