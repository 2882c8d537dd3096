# OOP boundary for external i/o
# all http/keys/timeouts live here, so the parser and store stay pure and testable
# use a thread-local session per worker thread, the service may fetch from a pool

from __future__ import annotations
import logging
import os
import threading
from typing import Dict, Any
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import DEFAULT_DAYS, DEFAULT_TIMEOUT
from .errors import ConfigError, NetworkError, ParseError

logger = logging.getLogger(__name__)


class WeatherAPIClient:
    # this class encapsulates provider details like base URL, params, auth, timeouts
    BASE_URL = "https://api.weatherapi.com/v1/forecast.json"
    MAX_DAYS = 10  # WeatherAPI caps the forecast at 10 days

    def __init__(
        self,
        api_key: str | None = None,
        days: int = DEFAULT_DAYS,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        base_url: str | None = None,
        user_agent: str = "weatherapp/0.1",
    ):
        self.api_key = api_key or os.getenv("WEATHERAPI_KEY")
        if not self.api_key:
            raise ConfigError("WEATHERAPI_KEY not set")
        if not (1 <= days <= self.MAX_DAYS):
            raise ConfigError(f"'days' must be between 1 and {self.MAX_DAYS} (got {days})")

        self.days = days
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL
        self.user_agent = user_agent

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

        # one attempt per fetch unless a caller opts in to retries
        self._retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def _params(self, location_query: str) -> Dict[str, Any]:
        # the API expects this exact ordering: key, q, days, then the fixed tail
        return {
            "key": self.api_key,
            "q": location_query,
            "days": self.days,
            "aqi": "no",
            "alerts": "no",
        }

    def build_url(self, location_query: str) -> str:
        prepared = requests.Request("GET", self.base_url, params=self._params(location_query)).prepare()
        return prepared.url

    def get_forecast(self, location_query: str) -> Dict[str, Any]:
        # fetch forecast JSON and hand back the decoded document
        # field-level validation belongs to the parser
        logger.debug("GET forecast q=%r days=%d", location_query, self.days)
        try:
            resp = self._session().get(self.base_url, params=self._params(location_query), timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Request error for {location_query!r}: {exc}") from exc

        if resp.status_code >= 400:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            raise NetworkError(
                f"HTTP {resp.status_code} for {location_query!r} (days={self.days}). Body: {snippet}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON for {location_query!r}: {exc}") from exc

        if not isinstance(data, dict):
            raise ParseError(f"Unexpected API shape for {location_query!r}: top level is {type(data).__name__}")

        return data
