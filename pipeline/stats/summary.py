"""
Dashboard summary statistics for a record batch.

Every value is recomputed from the batch passed in, after a stable sort
newest-first. When several records share the newest date, the one appearing
first in the batch is treated as the latest.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence, Tuple

from pipeline.ingestion.records import AirQualityRecord

RECENT_DAYS = 7
UNKNOWN_STATUS = "Unknown"


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures, already formatted for display."""
    current_pollution_index: str
    avg_pollution_7_days: str
    ai_prediction_accuracy: str
    latest_air_quality_status: str

    def to_dict(self) -> dict:
        return asdict(self)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def newest_first(records: Optional[Sequence[AirQualityRecord]]) -> list:
    return sorted(records or [], key=lambda r: r.date, reverse=True)


def summarize(records: Optional[Sequence[AirQualityRecord]]) -> DashboardSummary:
    ordered = newest_first(records)
    if not ordered:
        return DashboardSummary(
            current_pollution_index="0",
            avg_pollution_7_days="0.00",
            ai_prediction_accuracy="0.00",
            latest_air_quality_status=UNKNOWN_STATUS,
        )

    latest = ordered[0]
    recent = ordered[:RECENT_DAYS]
    return DashboardSummary(
        current_pollution_index=f"{latest.pollution_index:.0f}",
        avg_pollution_7_days=f"{_mean([r.pollution_index for r in recent]):.2f}",
        ai_prediction_accuracy=f"{_mean([r.ai_prediction_accuracy for r in ordered]):.2f}",
        latest_air_quality_status=latest.air_quality_status.value,
    )


def map_marker(records: Optional[Sequence[AirQualityRecord]]) -> Optional[Tuple[float, float]]:
    """(latitude, longitude) of the first record in the batch, for the single map pin."""
    if not records:
        return None
    first = records[0]
    return first.latitude, first.longitude
