import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from errors import UpstreamError, UpstreamParseError
from forecast_cache import ForecastCache
from models import Config, LocationConfig, SurfSnapshot, WeatherSnapshot
from normalizer import normalize
from open_meteo_client import OpenMeteoClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationRefreshResult:
    """Outcome of refreshing one location: new snapshots or the error."""

    slug: str
    weather: Optional[WeatherSnapshot] = None
    surf: Optional[SurfSnapshot] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshResult:
    """Result of one refresh cycle over all locations."""

    total: int
    success: int
    failed: int
    duration_ms: int
    finished_at: datetime

    def __str__(self) -> str:
        return (
            f"Refresh complete: {self.success}/{self.total} successful, "
            f"{self.failed} failed ({self.duration_ms}ms)"
        )


class ForecastRefreshTask:
    def __init__(self, client: OpenMeteoClient, cache: ForecastCache, config: Config):
        self.client = client
        self.cache = cache
        self.config = config
        self.running = False
        self.fetch_count = 0
        self.failure_count = 0
        self._cycle_lock = asyncio.Lock()

    @property
    def refresh_in_progress(self) -> bool:
        return self._cycle_lock.locked()

    async def start_background_updates(self, run_initial: bool = True):
        """Refresh every location now, then again after each interval."""
        self.running = True
        interval = self.config.server.refresh_interval_minutes * 60
        logger.info(f"Starting background forecast updates every {interval:g}s")

        if run_initial:
            await self._refresh_in_loop()

        while self.running:
            await asyncio.sleep(interval)
            if self.running:
                await self._refresh_in_loop()

    async def _refresh_in_loop(self):
        # A failed cycle must not end the loop; the next interval retries
        try:
            await self.refresh_all_locations()
        except Exception as e:
            logger.exception(f"Refresh cycle failed: {e}")

    async def refresh_all_locations(self) -> RefreshResult:
        """Run one refresh cycle, waiting for any cycle already in flight."""
        async with self._cycle_lock:
            return await self._run_cycle()

    async def trigger_refresh(self) -> Optional[RefreshResult]:
        """Run a cycle now unless one is already running."""
        if self._cycle_lock.locked():
            logger.info("Refresh already in progress, skipping manual trigger")
            return None
        return await self.refresh_all_locations()

    async def _run_cycle(self) -> RefreshResult:
        locations = list(self.config.locations.items())
        logger.info(f"Refreshing forecast data for {len(locations)} locations")
        started = time.monotonic()
        success = 0

        for slug, location in locations:
            try:
                result = await self.refresh_location(slug, location)
            except Exception as e:
                logger.exception(f"Unexpected error refreshing {slug}")
                result = LocationRefreshResult(
                    slug=slug, error=UpstreamError("refresh", slug, f"{type(e).__name__}: {e}")
                )
            if result.ok:
                self.cache.store(slug, result.weather, result.surf)
                self.fetch_count += 1
                success += 1
            else:
                self.failure_count += 1
                logger.error(
                    f"Failed to refresh {slug} ({location.name}), keeping cached data: "
                    f"{result.error}"
                )

        finished_at = datetime.now(timezone.utc)
        self.cache.mark_refreshed(finished_at)
        result = RefreshResult(
            total=len(locations),
            success=success,
            failed=len(locations) - success,
            duration_ms=int((time.monotonic() - started) * 1000),
            finished_at=finished_at,
        )
        logger.info(str(result))
        return result

    async def refresh_location(
        self, slug: str, location: LocationConfig
    ) -> LocationRefreshResult:
        """Fetch and normalize forecast data for a single location."""
        try:
            weather_raw = await self.client.fetch_weather(slug, location)
            marine_raw = await self.client.fetch_marine(slug, location)
        except UpstreamError as e:
            return LocationRefreshResult(slug=slug, error=e)

        try:
            weather, surf = normalize(weather_raw, marine_raw)
        except Exception as e:
            logger.exception(f"Could not normalize forecast data for {slug} ({location.name})")
            return LocationRefreshResult(
                slug=slug,
                error=UpstreamParseError("normalize", slug, f"{type(e).__name__}: {e}"),
            )

        logger.info(
            f"{location.name} weather: {weather.current_temp_f}F, {weather.condition}, "
            f"wind {weather.wind_mph}mph, humidity {weather.humidity_pct}%"
        )
        logger.info(
            f"{location.name} surf: sea {surf.sea_temp_f}F, waves {surf.wave_height_ft}ft "
            f"@ {surf.wave_period_s}s from {surf.swell_direction}, "
            f"rating {surf.surf_rating} ({surf.quality_score}/100)"
        )
        return LocationRefreshResult(slug=slug, weather=weather, surf=surf)

    def stop(self):
        """Stop the background update task."""
        self.running = False
        logger.info("Stopping background forecast updates")
