"""
Tests for Module 02 — Air-quality records and relaxed parsing.
"""

import json
from datetime import date

import pytest
from pydantic import ValidationError

from pipeline.ingestion.records import (
    AirQualityRecord,
    AirQualityStatus,
    RecordParseError,
    parse_records,
    records_to_json,
)
from tests.factories import make_batch, make_record


PASCAL_RECORD = {
    "Date": "2025-03-01",
    "PollutionIndex": 87.5,
    "AirQualityStatus": "Satisfactory",
    "Latitude": 28.6139,
    "Longitude": 77.209,
    "AIPredictionAccuracy": 92.3,
}


class TestParseRecords:
    def test_pascal_case_keys(self):
        records = parse_records(json.dumps([PASCAL_RECORD]))
        assert len(records) == 1
        r = records[0]
        assert r.date == date(2025, 3, 1)
        assert r.pollution_index == 87.5
        assert r.air_quality_status is AirQualityStatus.satisfactory
        assert r.latitude == 28.6139
        assert r.longitude == 77.209
        assert r.ai_prediction_accuracy == 92.3

    def test_keys_matched_case_insensitively(self):
        raw = {
            "date": "2025-03-01",
            "POLLUTIONINDEX": 10,
            "airQualityStatus": "Good",
            "latitude": 1.0,
            "LONGITUDE": 2.0,
            "aiPredictionAccuracy": 75,
        }
        r = parse_records(json.dumps([raw]))[0]
        assert r.pollution_index == 10.0
        assert r.ai_prediction_accuracy == 75.0

    def test_snake_case_keys(self):
        r = make_record()
        raw = r.model_dump(mode="json")
        assert parse_records(json.dumps([raw])) == [r]

    def test_numeric_strings_accepted(self):
        raw = dict(PASCAL_RECORD, PollutionIndex="120.5", Latitude="28.6",
                   Longitude="77.2", AIPredictionAccuracy="88")
        r = parse_records(json.dumps([raw]))[0]
        assert r.pollution_index == 120.5
        assert r.latitude == 28.6
        assert r.ai_prediction_accuracy == 88.0

    @pytest.mark.parametrize("field", ["PollutionIndex", "Latitude", "Longitude", "AIPredictionAccuracy"])
    @pytest.mark.parametrize("flag", [True, False])
    def test_boolean_numbers_rejected(self, field, flag):
        raw = dict(PASCAL_RECORD, **{field: flag})
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    @pytest.mark.parametrize("value", ["inf", "Infinity", "NaN", "1e999", float("inf"), float("nan")])
    def test_non_finite_pollution_index_rejected(self, value):
        raw = dict(PASCAL_RECORD, PollutionIndex=value)
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    def test_infinity_token_rejected(self):
        text = json.dumps([PASCAL_RECORD]).replace("87.5", "Infinity")
        with pytest.raises(RecordParseError):
            parse_records(text)

    def test_overflowing_integer_rejected(self):
        text = json.dumps([PASCAL_RECORD]).replace("87.5", "1" + "0" * 400)
        with pytest.raises(RecordParseError):
            parse_records(text)

    def test_datetime_string_truncated_to_date(self):
        raw = dict(PASCAL_RECORD, Date="2025-03-01T00:00:00")
        assert parse_records(json.dumps([raw]))[0].date == date(2025, 3, 1)

    def test_status_matched_loosely(self):
        raw = dict(PASCAL_RECORD, AirQualityStatus="very poor")
        r = parse_records(json.dumps([raw]))[0]
        assert r.air_quality_status is AirQualityStatus.very_poor

    def test_unknown_status_fails(self):
        raw = dict(PASCAL_RECORD, AirQualityStatus="Hazardous")
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    def test_negative_pollution_index_fails(self):
        raw = dict(PASCAL_RECORD, PollutionIndex=-1)
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    def test_latitude_out_of_range_fails(self):
        raw = dict(PASCAL_RECORD, Latitude=95.0)
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    def test_missing_field_fails(self):
        raw = {k: v for k, v in PASCAL_RECORD.items() if k != "Latitude"}
        with pytest.raises(RecordParseError):
            parse_records(json.dumps([raw]))

    def test_invalid_json_fails(self):
        with pytest.raises(RecordParseError):
            parse_records('[{"Date": ')

    def test_object_instead_of_array_fails(self):
        with pytest.raises(RecordParseError):
            parse_records(json.dumps(PASCAL_RECORD))

    def test_empty_array(self):
        assert parse_records("[]") == []

    def test_unknown_keys_ignored(self):
        raw = dict(PASCAL_RECORD, Notes="synthetic")
        assert len(parse_records(json.dumps([raw]))) == 1


class TestRecordModel:
    def test_record_is_immutable(self):
        r = make_record()
        with pytest.raises(ValidationError):
            r.pollution_index = 10.0

    def test_to_wire_uses_pascal_case(self):
        wire = make_record(date(2025, 3, 1), 42.0).to_wire()
        assert wire == {
            "Date": "2025-03-01",
            "PollutionIndex": 42.0,
            "AirQualityStatus": "Good",
            "Latitude": 40.7128,
            "Longitude": -74.006,
            "AIPredictionAccuracy": 90.0,
        }

    def test_round_trip_through_relaxed_parser(self):
        batch = make_batch(5)
        assert parse_records(records_to_json(batch)) == batch
