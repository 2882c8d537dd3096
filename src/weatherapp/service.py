# orchestration: location query -> fetch -> normalize -> publish
# fetch() is the synchronous path, submit() runs the same path on a small thread pool

from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .client import WeatherAPIClient
from .config import Settings
from .errors import LocationError, WeatherAPIError
from .location import LocationProvider, LocationResolver
from .models import ForecastSnapshot
from .parser import normalize
from .store import ForecastStore

logger = logging.getLogger(__name__)


class WeatherService:
    def __init__(
        self,
        client: WeatherAPIClient,
        resolver: LocationResolver,
        store: Optional[ForecastStore] = None,
        max_workers: int = 2,
    ):
        self.client = client
        self.resolver = resolver
        self.store = store or ForecastStore()
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="forecast")

    @classmethod
    def from_settings(cls, settings: Settings, provider: LocationProvider) -> "WeatherService":
        client = WeatherAPIClient(api_key=settings.api_key, days=settings.days, timeout=settings.timeout)
        resolver = LocationResolver(provider, timeout=settings.location_timeout)
        return cls(client, resolver)

    def fetch(self, location_query: str) -> Optional[ForecastSnapshot]:
        # returns None when a newer request took over while this one was running
        return self._fetch(location_query, self.store.begin())

    def _fetch(self, location_query: str, token: int) -> Optional[ForecastSnapshot]:
        try:
            payload = self.client.get_forecast(location_query)
            days, current = normalize(payload)
        except WeatherAPIError as exc:
            # nothing is published for a failed attempt
            logger.error("forecast for %r failed: %s", location_query, exc)
            raise

        snapshot = self.store.publish(token, days, current)
        if snapshot is None:
            logger.info("forecast for %r superseded by a newer request", location_query)
        else:
            logger.info("published %d day(s) for %s", len(days), current.city)
        return snapshot

    def refresh_from_device(self) -> Optional[ForecastSnapshot]:
        try:
            query = self.resolver.resolve_from_device()
        except LocationError as exc:
            logger.warning("device location unavailable: %s", exc)
            raise
        return self.fetch(query)

    def search_by_name(self, name: str) -> Optional[ForecastSnapshot]:
        return self.fetch(self.resolver.resolve_from_name(name))

    def submit(self, location_query: str) -> Future:
        # the token is taken now, so a job still queued cannot overtake a later request
        # allow exceptions to propagate through the future
        token = self.store.begin()
        return self._pool.submit(self._fetch, location_query, token)

    def close(self) -> None:
        self._pool.shutdown(wait=True)

    def __enter__(self) -> "WeatherService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
