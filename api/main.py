"""
AirTrend — FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import get_pipeline
from api.routes import trends

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_pipeline().client.settings
    if settings.is_configured:
        logger.info("AirTrend API starting up, deployment %s", settings.deployment)
    else:
        logger.warning(
            "Azure OpenAI settings incomplete, every request will serve fallback data"
        )
    yield
    logger.info("AirTrend API shutting down")


app = FastAPI(
    title="AirTrend API",
    description="LLM-generated air-quality trends and forecasts",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(trends.router, prefix="/api/trends", tags=["Trends"])


@app.get("/api/health", tags=["Health"])
def health():
    return {"status": "ok", "service": "airtrend-api", "version": API_VERSION}
