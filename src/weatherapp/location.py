# location resolution: turns a device fix or a typed place name into a forecast query

from __future__ import annotations
import logging
import threading
import time
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Optional, Protocol

import requests

from .config import DEFAULT_LOCATION_TIMEOUT
from .errors import LocationDisabled, LocationTimeout, LocationUnavailable, PermissionDenied
from .models import Coordinates

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    # a source of device coordinates, current_location blocks until one fix is available

    def permission_granted(self) -> bool:
        ...

    def is_enabled(self) -> bool:
        ...

    def current_location(self) -> Coordinates:
        ...


class StaticLocationProvider:
    # always reports the coordinates it was built with (cli --coords, tests)

    def __init__(self, latitude: float, longitude: float, granted: bool = True, enabled: bool = True):
        self.coordinates = Coordinates(latitude, longitude)
        self.granted = granted
        self.enabled = enabled

    def permission_granted(self) -> bool:
        return self.granted

    def is_enabled(self) -> bool:
        return self.enabled

    def current_location(self) -> Coordinates:
        return self.coordinates


class IPLocationProvider:
    # approximate device location from the public IP address (ip-api.com)
    URL = "http://ip-api.com/json/"

    def __init__(self, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def permission_granted(self) -> bool:
        # no OS-level prompt on the desktop
        return True

    def is_enabled(self) -> bool:
        return True

    def current_location(self) -> Coordinates:
        try:
            response = self.session.get(
                self.URL,
                timeout=self.timeout,
                headers={"User-Agent": "weatherapp/0.1"},
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise LocationUnavailable(f"IP geolocation failed: {exc}") from exc

        if not isinstance(data, dict) or data.get("status") == "fail":
            message = data.get("message") if isinstance(data, dict) else data
            raise LocationUnavailable(f"IP geolocation failed: {message}")

        try:
            return Coordinates(float(data["lat"]), float(data["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise LocationUnavailable(f"IP geolocation returned no coordinates: {exc}") from exc


class LocationResolver:
    # produces location queries for the forecast fetcher
    # a device fix runs on its own daemon thread and is waited on for at most `timeout` seconds
    # calls arriving while a fix is pending join it, unless it is older than `timeout`:
    # then it is given up on and a fresh fix starts, so a provider that never answers
    # cannot block later calls

    def __init__(self, provider: LocationProvider, timeout: float = DEFAULT_LOCATION_TIMEOUT):
        self.provider = provider
        self.timeout = timeout
        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._started = 0.0

    def _run_fix(self, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self.provider.current_location())
        except Exception as exc:
            # delivered to the waiting caller through the future
            future.set_exception(exc)

    def _start_fix(self) -> Future:
        future: Future = Future()
        threading.Thread(target=self._run_fix, args=(future,), name="location-fix", daemon=True).start()
        self._pending = future
        self._started = time.monotonic()
        return future

    def _pending_fix(self) -> Future:
        with self._lock:
            if self._pending is None or self._pending.done():
                return self._start_fix()
            if time.monotonic() - self._started >= self.timeout:
                logger.warning("abandoning location fix pending for over %.1fs", self.timeout)
                return self._start_fix()
            return self._pending

    def resolve_from_device(self) -> str:
        if not self.provider.permission_granted():
            raise PermissionDenied("location permission not granted")
        if not self.provider.is_enabled():
            # caller is expected to ask the user to turn location on
            raise LocationDisabled("location services are disabled")

        future = self._pending_fix()
        try:
            coordinates = future.result(timeout=self.timeout)
        except FutureTimeout:
            logger.warning("no location fix within %.1fs", self.timeout)
            raise LocationTimeout(f"no location fix within {self.timeout:.1f}s") from None

        query = coordinates.as_query()
        logger.info("device location resolved to %s", query)
        return query

    def resolve_from_name(self, name: str) -> str:
        # forwarded unchanged, the API reports names it cannot place
        return name
