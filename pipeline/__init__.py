"""
AirTrend — LLM-backed air-quality pipeline.

Components:
    - extraction: pulls the JSON array out of free-text model output
    - ingestion: record model, relaxed parser and the chat-completion connector
    - forecasting: prompt builders, fallback datasets and the TrendPipeline
    - stats: dashboard summary statistics
"""
