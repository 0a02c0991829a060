"""
Air-quality record model and relaxed JSON parsing.

Model output and the bundled fallback files are parsed through the same
rules: field names are matched case-insensitively (PascalCase, camelCase and
snake_case all resolve), and numeric fields may arrive as JSON numbers or as
numeric strings.
"""

import enum
import json
import math
import datetime
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


class AirQualityStatus(str, enum.Enum):
    good = "Good"
    satisfactory = "Satisfactory"
    moderate = "Moderate"
    poor = "Poor"
    very_poor = "Very Poor"
    severe = "Severe"

    @classmethod
    def _missing_(cls, value):
        # Models are inconsistent about casing and spacing ("very_poor", "VERY POOR")
        if isinstance(value, str):
            wanted = value.strip().lower().replace("_", " ")
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None


def _normalise_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


class AirQualityRecord(BaseModel):
    """One daily observation or forecast point for a location."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    date: datetime.date = Field(alias="Date")
    pollution_index: float = Field(alias="PollutionIndex", ge=0)
    air_quality_status: AirQualityStatus = Field(alias="AirQualityStatus")
    latitude: float = Field(alias="Latitude", ge=-90, le=90)
    longitude: float = Field(alias="Longitude", ge=-180, le=180)
    ai_prediction_accuracy: float = Field(alias="AIPredictionAccuracy", ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup = {}
        for name, info in cls.model_fields.items():
            lookup[_normalise_key(name)] = info.alias or name
            lookup[_normalise_key(info.alias or name)] = info.alias or name
        matched: Dict[str, Any] = {}
        for key, value in data.items():
            target = lookup.get(_normalise_key(str(key)))
            if target is not None and target not in matched:
                matched[target] = value
        return matched

    @field_validator(
        "pollution_index", "latitude", "longitude", "ai_prediction_accuracy", mode="before"
    )
    @classmethod
    def _reject_non_numeric_literals(cls, value: Any) -> Any:
        # bool is an int subclass; JSON true/false is not a number
        if isinstance(value, bool):
            raise ValueError("boolean is not a number")
        if isinstance(value, (int, float, str)):
            try:
                number = float(value)
            except OverflowError:
                raise ValueError("number must be finite")
            except ValueError:
                return value
            if not math.isfinite(number):
                raise ValueError("number must be finite")
        return value

    @field_validator("air_quality_status", mode="before")
    @classmethod
    def _match_status_loosely(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return AirQualityStatus(value)
            except ValueError:
                return value
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            try:
                return datetime.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value

    def to_wire(self) -> Dict[str, Any]:
        """Serialise with the PascalCase keys the dashboard and prompts use."""
        return self.model_dump(mode="json", by_alias=True)


_RECORD_LIST = TypeAdapter(List[AirQualityRecord])


class RecordParseError(ValueError):
    """Raised when text cannot be turned into a list of records."""


def parse_records(json_text: str) -> List[AirQualityRecord]:
    """
    Parse a JSON array of records.

    Raises:
        RecordParseError: on invalid JSON, a non-array document, or any record
            failing validation.
    """
    try:
        payload = json.loads(json_text)
    except (TypeError, ValueError) as e:
        raise RecordParseError(f"invalid JSON: {e}") from e

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise RecordParseError(f"expected a JSON array, got {type(payload).__name__}")

    try:
        return _RECORD_LIST.validate_python(payload)
    except ValueError as e:
        raise RecordParseError(str(e)) from e


def records_to_json(records: Iterable[AirQualityRecord]) -> str:
    return json.dumps([r.to_wire() for r in records])
