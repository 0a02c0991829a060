"""
Bundled fallback datasets.

Served whenever live generation fails so the dashboard always has something
to draw. A fallback that cannot be read yields an empty batch.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from pipeline.ingestion.records import AirQualityRecord, RecordParseError, parse_records

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


@dataclass(frozen=True)
class FallbackSource:
    """A static JSON array of records shipped with the package."""
    name: str
    path: Path

    def load(self) -> List[AirQualityRecord]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Fallback dataset %s unreadable at %s: %s", self.name, self.path, e)
            return []
        try:
            records = parse_records(text)
        except RecordParseError as e:
            logger.error("Fallback dataset %s is not a valid record array: %s", self.name, e)
            return []
        logger.info("Loaded %d fallback records from %s", len(records), self.name)
        return records


CURRENT_SNAPSHOT = FallbackSource("current_data", RESOURCES_DIR / "current_data.json")
PREDICTION = FallbackSource("prediction_data", RESOURCES_DIR / "prediction_data.json")
