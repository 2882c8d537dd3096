# error types shared across layers, one root so callers can catch everything from this package

from __future__ import annotations


class WeatherAppError(RuntimeError):
    pass


class ConfigError(WeatherAppError):
    pass


class LocationError(WeatherAppError):
    # device location could not be turned into a query
    pass


class PermissionDenied(LocationError):
    pass


class LocationDisabled(LocationError):
    pass


class LocationTimeout(LocationError):
    pass


class LocationUnavailable(LocationError):
    pass


class WeatherAPIError(WeatherAppError):
    pass


class NetworkError(WeatherAPIError):
    # transport failure or HTTP error status
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WeatherAPIError):
    # body is not JSON, or a required field is missing or has the wrong type
    pass
