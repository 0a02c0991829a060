"""
Tests for Module 01 — Response Extraction.
"""

from pipeline.extraction.response_extractor import extract_json


class TestExtractJson:
    def test_clean_array_is_unchanged(self):
        text = '[{"Date":"2025-03-01","PollutionIndex":42}]'
        assert extract_json(text) == text

    def test_strips_fence_and_repairs_trailing_comma(self):
        assert extract_json('```json\n[{"a":1,}]\n```') == '[{"a":1}]'

    def test_no_brackets_returns_empty(self):
        assert extract_json("no data here") == ""

    def test_empty_input_returns_empty(self):
        assert extract_json("") == ""

    def test_none_input_returns_empty(self):
        assert extract_json(None) == ""

    def test_doubled_fence(self):
        assert extract_json('```json\n```json\n[{"a":1}]\n```\n```') == '[{"a":1}]'

    def test_surrounding_prose_is_dropped(self):
        text = 'Here is your data:\n[{"a": 1}, {"a": 2}]\nLet me know if you need more.'
        assert extract_json(text) == '[{"a": 1}, {"a": 2}]'

    def test_first_array_wins(self):
        assert extract_json('[{"a":1}] and later [{"b":2}]') == '[{"a":1}]'

    def test_array_spanning_lines(self):
        text = '[\n  {"a": 1},\n  {"a": 2}\n]'
        assert extract_json(text) == text

    def test_trailing_comma_with_whitespace_keeps_whitespace(self):
        text = '[{"a": 1,\n  }]'
        assert extract_json(text) == '[{"a": 1\n  }]'

    def test_every_trailing_comma_repaired(self):
        text = '[{"a":1,}, {"b":2 ,}]'
        assert extract_json(text) == '[{"a":1}, {"b":2 }]'

    def test_comma_between_objects_kept(self):
        text = '[{"a":1},{"b":2}]'
        assert extract_json(text) == text
