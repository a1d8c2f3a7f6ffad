import logging
from typing import List, Optional

from classification import rating_color
from errors import LocationNotReadyError, NotFoundError
from forecast_cache import ForecastCache
from models import BeachSummary, CacheEntry, Config, SurfSnapshot, WeatherSnapshot

logger = logging.getLogger(__name__)


class ForecastService:
    """Read-only view of cached forecasts for the HTTP layer."""

    def __init__(self, config: Config, cache: ForecastCache):
        self.config = config
        self.cache = cache
        self.request_count = 0

    def get_snapshot(self, slug: str) -> CacheEntry:
        """
        Get the weather/surf pair for a location.

        Every call counts towards request_count, including misses. Raises
        NotFoundError for an unknown slug and LocationNotReadyError when the
        location is configured but has not been refreshed yet.
        """
        self.request_count += 1
        if slug not in self.config.locations:
            raise NotFoundError(slug)
        entry = self.cache.get(slug)
        if entry is None:
            raise LocationNotReadyError(slug)
        logger.debug(f"Serving {slug} from cache stored at {entry.stored_at.isoformat()}")
        return entry

    def get_weather(self, slug: str) -> WeatherSnapshot:
        return self.get_snapshot(slug).weather

    def get_surf(self, slug: str) -> SurfSnapshot:
        return self.get_snapshot(slug).surf

    def list_summaries(self) -> List[BeachSummary]:
        """One summary per configured location, in configuration order."""
        summaries = []
        for slug, location in self.config.locations.items():
            entry = self.cache.get(slug)
            if entry is None:
                summaries.append(
                    BeachSummary(
                        slug=slug,
                        name=location.name,
                        weather_city=location.weather_city,
                        quality_score=0,
                        surf_rating="Unknown",
                        wave_height_ft=0.0,
                        rating_color="red",
                    )
                )
                continue

            surf = entry.surf
            summaries.append(
                BeachSummary(
                    slug=slug,
                    name=location.name,
                    weather_city=location.weather_city,
                    quality_score=surf.quality_score,
                    surf_rating=surf.surf_rating,
                    wave_height_ft=surf.wave_height_ft,
                    rating_color=rating_color(surf.quality_score),
                )
            )
        return summaries

    def cache_age_seconds(self) -> Optional[float]:
        return self.cache.age_seconds()
