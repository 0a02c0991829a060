"""Shared test fixtures for the AirTrend test suite."""

import pytest

from pipeline.ingestion.chat_connector import ChatCompletionClient
from tests.factories import TEST_SETTINGS, StubTransport, completion_body


@pytest.fixture()
def stub_transport():
    return StubTransport(json_body=completion_body("[]"))


@pytest.fixture()
def chat_client(stub_transport):
    return ChatCompletionClient(TEST_SETTINGS, transport=stub_transport.transport)
