from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from skycast.api import routes as api_routes
from skycast.api import views as dashboard_views
from skycast.config import get_settings
from skycast.dashboard.controller import DashboardController
from skycast.middleware.request_tracker import RequestTrackerMiddleware
from skycast.services.external_api import WeatherAPIClient
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting SkyCast...")

    weather_client = WeatherAPIClient()
    app.state.weather_client = weather_client
    if not weather_client.is_configured:
        logger.warning(
            "OPENWEATHER_API_KEY is not set; weather requests will fail",
            extra={"event": "config_warning"},
        )

    app.state.dashboard = None
    dashboard_client = None
    if settings.enable_dashboard:
        # The dashboard reaches the aggregator in-process through the ASGI app.
        dashboard_client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=settings.dashboard_api_base_url,
        )
        app.state.dashboard = DashboardController(dashboard_client)
        await app.state.dashboard.start()

    yield

    logger.info("Shutting down SkyCast...")

    if app.state.dashboard is not None:
        await app.state.dashboard.stop()
        app.state.dashboard = None
    if dashboard_client is not None:
        await dashboard_client.aclose()

    await weather_client.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(RequestTrackerMiddleware)

Instrumentator().instrument(app).expose(app, endpoint="/prometheus-metrics")

app.include_router(api_routes.router)
app.include_router(dashboard_views.router)

if __name__ == "__main__":
    uvicorn.run(
        "skycast.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )
