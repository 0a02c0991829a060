"""
Trend Pipeline — AirTrend

Turns a prompt into a batch of AirQualityRecords:

    prompt -> chat completion -> extract JSON array -> parse records

Each stage reports failure as a FetchError value instead of raising. Only
request_records() converts a failed outcome into the bundled fallback data,
so callers never see an exception and tests can still tell which stage
failed.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable, Iterable, List, Optional

from pipeline.extraction.response_extractor import extract_json
from pipeline.forecasting import fallback
from pipeline.forecasting.fallback import FallbackSource
from pipeline.forecasting.prompts import (
    current_trends_prompt,
    forecast_history,
    forecast_prompt,
)
from pipeline.ingestion.chat_connector import (
    ChatCompletionClient,
    ChatCompletionError,
    ChatFailure,
)
from pipeline.ingestion.records import AirQualityRecord, RecordParseError, parse_records

logger = logging.getLogger(__name__)

PromptBuilder = Callable[[], str]


class FetchErrorKind(str, enum.Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    EXTRACTION = "extraction"
    PARSE = "parse"
    EMPTY_HISTORY = "empty_history"


class DataSource(str, enum.Enum):
    LIVE = "live"
    FALLBACK = "fallback"


_FAILURE_KINDS = {
    ChatFailure.TRANSPORT: FetchErrorKind.TRANSPORT,
    ChatFailure.HTTP_STATUS: FetchErrorKind.HTTP_STATUS,
    ChatFailure.MALFORMED_RESPONSE: FetchErrorKind.EXTRACTION,
}


@dataclass(frozen=True)
class FetchError:
    """Why live generation produced no records."""
    kind: FetchErrorKind
    detail: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


@dataclass
class FetchOutcome:
    """Records returned for one fetch, plus what went wrong if they are fallback data."""
    records: List[AirQualityRecord] = field(default_factory=list)
    error: Optional[FetchError] = None
    source: DataSource = DataSource.LIVE

    @property
    def used_fallback(self) -> bool:
        return self.source is DataSource.FALLBACK


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class TrendPipeline:
    """
    Generates current trends and forecasts for the dashboard.

    Holds no state between calls; every fetch builds a fresh batch.

    Args:
        client: Chat-completion client used for every request.
        current_fallback: Dataset served when current trends fail.
        forecast_fallback: Dataset served when a forecast fails.
        today: Clock returning the current UTC date.
    """

    def __init__(
        self,
        client: ChatCompletionClient,
        current_fallback: FallbackSource = fallback.CURRENT_SNAPSHOT,
        forecast_fallback: FallbackSource = fallback.PREDICTION,
        today: Callable[[], date] = _utc_today,
    ):
        self.client = client
        self.current_fallback = current_fallback
        self.forecast_fallback = forecast_fallback
        self._today = today

    # ── Public operations ─────────────────────────────────────────────────────

    async def fetch_current_trends(self, location: str) -> List[AirQualityRecord]:
        outcome = await self.current_trends(location)
        return outcome.records

    async def fetch_forecast(
        self, history: Optional[Iterable[AirQualityRecord]]
    ) -> List[AirQualityRecord]:
        outcome = await self.forecast(history)
        return outcome.records

    async def current_trends(self, location: str) -> FetchOutcome:
        today = self._today()
        return await self.request_records(
            lambda: current_trends_prompt(location, today),
            self.current_fallback,
        )

    async def forecast(self, history: Optional[Iterable[AirQualityRecord]]) -> FetchOutcome:
        try:
            projected = forecast_history(history)
        except (AttributeError, TypeError) as e:
            return await self._fall_back(
                FetchError(FetchErrorKind.PARSE, f"history is not a sequence of records: {e}"),
                self.forecast_fallback,
            )
        if not projected:
            return await self._fall_back(
                FetchError(FetchErrorKind.EMPTY_HISTORY, "no historical records to forecast from"),
                self.forecast_fallback,
            )
        today = self._today()
        return await self.request_records(
            lambda: forecast_prompt(projected, today),
            self.forecast_fallback,
        )

    async def request_records(
        self, prompt_builder: PromptBuilder, fallback_source: FallbackSource
    ) -> FetchOutcome:
        """
        Run one generation attempt and fall back to static data on failure.

        Args:
            prompt_builder: Returns the prompt to send.
            fallback_source: Dataset to serve if any stage fails.

        Returns:
            FetchOutcome with live records, or fallback records and the error.
        """
        outcome = await self._generate(prompt_builder)
        if outcome.error is not None:
            return await self._fall_back(outcome.error, fallback_source)
        logger.info("Generated %d live records", len(outcome.records))
        return outcome

    # ── Stages ────────────────────────────────────────────────────────────────

    async def _generate(self, prompt_builder: PromptBuilder) -> FetchOutcome:
        try:
            raw_text = await self.client.complete(prompt_builder())
        except ChatCompletionError as e:
            return FetchOutcome(error=FetchError(_FAILURE_KINDS[e.failure], str(e)))
        except Exception as e:
            logger.exception("Unexpected chat completion failure")
            return FetchOutcome(error=FetchError(FetchErrorKind.TRANSPORT, f"unexpected error: {e}"))

        json_text = extract_json(raw_text)
        if not json_text:
            return FetchOutcome(
                error=FetchError(FetchErrorKind.EXTRACTION, "no JSON array in model response")
            )

        try:
            records = parse_records(json_text)
        except RecordParseError as e:
            return FetchOutcome(error=FetchError(FetchErrorKind.PARSE, str(e)))

        return FetchOutcome(records=records)

    async def _fall_back(self, error: FetchError, fallback_source: FallbackSource) -> FetchOutcome:
        if error.kind is FetchErrorKind.EMPTY_HISTORY:
            logger.warning("Serving %s fallback: %s", fallback_source.name, error)
        else:
            logger.error("Live generation failed, serving %s fallback: %s",
                         fallback_source.name, error)
        return FetchOutcome(
            records=await asyncio.to_thread(fallback_source.load),
            error=error,
            source=DataSource.FALLBACK,
        )
