import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from background_tasks import ForecastRefreshTask
from config_loader import get_location_slugs, load_config
from errors import LocationNotReadyError, NotFoundError
from forecast_cache import ForecastCache
from forecast_service import ForecastService
from models import BeachSummary, Config, ErrorResponse, SurfSnapshot, WeatherSnapshot
from open_meteo_client import OpenMeteoClient, create_http_client

# Configure logging with Docker-friendly format
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),  # Console output for Docker logs
        (
            logging.FileHandler("/app/logs/surf_api.log")
            if os.path.exists("/app/logs")
            else logging.NullHandler()
        ),
    ],
)
logger = logging.getLogger(__name__)

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


def create_app(
    config: Optional[Config] = None, http_client: Optional[httpx.AsyncClient] = None
) -> FastAPI:
    """
    Build the API with its cache, refresh task and read service wired together.

    A caller-supplied http_client is used as is and left open on shutdown.
    """
    config = config or load_config()
    owns_client = http_client is None
    http_client = http_client or create_http_client(config.upstream)

    cache = ForecastCache()
    forecast_service = ForecastService(config, cache)
    update_task = ForecastRefreshTask(
        OpenMeteoClient(http_client, config.upstream), cache, config
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle startup and shutdown events."""
        logger.info("Starting surf forecast API")
        logger.info(f"Configured locations: {get_location_slugs(config)}")
        logger.info(f"Refresh interval: {config.server.refresh_interval_minutes} minutes")

        if config.server.warm_on_startup:
            await update_task.refresh_all_locations()

        background_task = asyncio.create_task(
            update_task.start_background_updates(
                run_initial=not config.server.warm_on_startup
            )
        )

        yield

        logger.info("Shutting down surf forecast API")
        update_task.stop()
        background_task.cancel()
        try:
            await background_task
        except asyncio.CancelledError:
            logger.info("Background task cancelled successfully")
        except Exception as e:
            logger.error(f"Background task ended with an error: {e}")
        cache.clear()
        if owns_client:
            await http_client.aclose()

    app = FastAPI(
        title="Surf Forecast API",
        description="Weather and surf conditions for configured beaches",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.cache = cache
    app.state.forecast_service = forecast_service
    app.state.update_task = update_task

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        status_code = 503 if isinstance(exc, LocationNotReadyError) else 404
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500, content={"error": "Internal server error", "message": str(exc)}
        )

    @app.get("/api/beaches", response_model=List[BeachSummary])
    async def get_beaches():
        """Summary of current surf conditions for every beach, in configured order."""
        return forecast_service.list_summaries()

    @app.get(
        "/api/beach/{slug}", response_model=SurfSnapshot, responses=NOT_FOUND_RESPONSES
    )
    async def get_beach(slug: str):
        """Current, hourly and daily surf conditions for one beach."""
        return forecast_service.get_surf(slug)

    @app.get(
        "/api/weather/{slug}",
        response_model=WeatherSnapshot,
        responses=NOT_FOUND_RESPONSES,
    )
    async def get_weather(slug: str):
        """Current weather and daily forecast for one beach's city."""
        return forecast_service.get_weather(slug)

    @app.get("/locations")
    async def get_locations():
        """Get list of all configured locations."""
        return {
            "locations": {
                slug: location.model_dump() for slug, location in config.locations.items()
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        last_refreshed_at = cache.last_refreshed_at
        return {
            "status": "healthy",
            "cached_locations": cache.slugs(),
            "cached_count": len(cache),
            "total_locations": len(config.locations),
            "refresh_interval_minutes": config.server.refresh_interval_minutes,
            "last_refreshed_at": last_refreshed_at.isoformat() if last_refreshed_at else None,
            "cache_age_seconds": forecast_service.cache_age_seconds(),
            "refresh_in_progress": update_task.refresh_in_progress,
            "fetch_count": update_task.fetch_count,
            "failure_count": update_task.failure_count,
            "request_count": forecast_service.request_count,
        }

    @app.post("/refresh", responses={409: {"model": ErrorResponse}})
    async def refresh_all():
        """Manually run a refresh cycle for every location."""
        result = await update_task.trigger_refresh()
        if result is None:
            return JSONResponse(
                status_code=409, content={"error": "Refresh already in progress"}
            )
        return {
            "message": str(result),
            "total": result.total,
            "success": result.success,
            "failed": result.failed,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = app.state.config
    host = os.getenv("HOST", config.server.host)
    port = int(os.getenv("PORT", config.server.port))

    logger.info(f"Starting server on {host}:{port}")

    uvicorn.run(app, host=host, port=port, log_level=log_level.lower(), access_log=True)
