import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from models import CacheEntry, SurfSnapshot, WeatherSnapshot

logger = logging.getLogger(__name__)


class ForecastCache:
    """
    In-memory forecast cache, one entry per location slug.

    Entries are immutable and the slug mapping is replaced as a whole on every
    write, so readers always see a consistent weather/surf pair without locking.
    Writes are expected from a single refresh cycle at a time.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self.last_refreshed_at: Optional[datetime] = None

    def store(self, slug: str, weather: WeatherSnapshot, surf: SurfSnapshot) -> CacheEntry:
        """Publish a new weather/surf pair for a location."""
        entry = CacheEntry(
            weather=weather, surf=surf, stored_at=datetime.now(timezone.utc)
        )
        entries = dict(self._entries)
        entries[slug] = entry
        self._entries = entries
        logger.info(f"Updated cache for {slug}")
        return entry

    def get(self, slug: str) -> Optional[CacheEntry]:
        """Get the cached entry for a location, if any."""
        return self._entries.get(slug)

    def slugs(self):
        return list(self._entries.keys())

    def mark_refreshed(self, when: Optional[datetime] = None):
        self.last_refreshed_at = when or datetime.now(timezone.utc)

    def age_seconds(self, now: Optional[datetime] = None) -> Optional[float]:
        """Seconds since the last completed refresh cycle."""
        if self.last_refreshed_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return (now - self.last_refreshed_at).total_seconds()

    def clear(self):
        """Clear all cached data."""
        self._entries = {}
        self.last_refreshed_at = None
        logger.info("Cleared forecast cache")

    def __len__(self) -> int:
        return len(self._entries)
