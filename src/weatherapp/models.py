# models and tiny display helpers to keep data shapes explicit and reusable across the app

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def as_query(self) -> str:
        # the forecast API accepts "lat,lon" as a location query
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class WeatherRecord:
    # one forecast entry, either a day or the current moment
    # values stay in the API's text form, an empty current_temp marks a daily record
    city: str
    timestamp: str
    condition_text: str
    current_temp: str
    max_temp: str
    min_temp: str
    icon_url: str
    hours_payload: str

    @property
    def is_current(self) -> bool:
        return self.current_temp != ""


@dataclass(frozen=True)
class HourRecord:
    # one entry of a day's hourly breakdown
    city: str
    timestamp: str
    condition_text: str
    current_temp: str
    icon_url: str


@dataclass(frozen=True)
class ForecastSnapshot:
    # day list and current record published together
    days: Tuple[WeatherRecord, ...]
    current: WeatherRecord
    generation: int


def whole_degrees(value: str) -> int:
    # "6.7" -> 6, truncates toward zero like the card always did
    return int(float(value))


def temperature_line(record: WeatherRecord) -> str:
    # daily records have no current temp, show the day's range instead
    if record.is_current:
        return f"{record.current_temp}°C"
    return f"{whole_degrees(record.max_temp)}°C / {whole_degrees(record.min_temp)}°C"


def max_min_line(record: WeatherRecord) -> str:
    # the range is already in temperature_line for daily records
    if not record.is_current:
        return ""
    return f"{record.max_temp}°C / {record.min_temp}°C"


def icon_href(icon_url: str) -> str:
    # the API hands out protocol-relative urls ("//cdn.weatherapi.com/...")
    if icon_url.startswith("//"):
        return "https:" + icon_url
    return icon_url
