"""
Builds the TrendPipeline from environment settings.
"""
from functools import lru_cache

from pipeline.config import ChatSettings
from pipeline.forecasting.trend_pipeline import TrendPipeline
from pipeline.ingestion.chat_connector import ChatCompletionClient


@lru_cache(maxsize=1)
def _build_pipeline() -> TrendPipeline:
    return TrendPipeline(ChatCompletionClient(ChatSettings.from_env()))


def get_pipeline() -> TrendPipeline:
    """FastAPI dependency returning the shared, stateless pipeline."""
    return _build_pipeline()
