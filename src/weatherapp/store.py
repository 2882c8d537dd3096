# latest published forecast, observed by the views
# single writer: a generation token decides which completion may publish

from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional, Sequence

from .models import ForecastSnapshot, WeatherRecord

logger = logging.getLogger(__name__)

Observer = Callable[[ForecastSnapshot], None]


class ForecastStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._snapshot: Optional[ForecastSnapshot] = None
        self._observers: List[Observer] = []

    @property
    def snapshot(self) -> Optional[ForecastSnapshot]:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        # every request takes a fresh token, older tokens become stale
        with self._lock:
            self._generation += 1
            return self._generation

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def publish(self, token: int, days: Sequence[WeatherRecord], current: WeatherRecord) -> Optional[ForecastSnapshot]:
        with self._lock:
            if token != self._generation:
                logger.debug("dropping stale forecast (token %d, latest %d)", token, self._generation)
                return None
            snapshot = ForecastSnapshot(days=tuple(days), current=current, generation=token)
            self._snapshot = snapshot
            observers = list(self._observers)

        # notify outside the lock so an observer may read the store
        # a failing observer must not keep the snapshot from the others
        for observer in observers:
            try:
                observer(snapshot)
            except Exception:
                logger.exception("forecast observer %r failed", observer)
        return snapshot
