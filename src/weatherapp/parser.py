# transform the raw provider payload into our typed records and check shape on the way
# every missing key or wrong type becomes a ParseError naming the json path

from __future__ import annotations
import json
from typing import Any, Dict, List, Tuple

from .errors import ParseError
from .models import HourRecord, WeatherRecord


def _field(obj: Any, key: str, path: str) -> Any:
    if not isinstance(obj, dict):
        raise ParseError(f"{path or '<root>'} is not an object")
    try:
        return obj[key]
    except KeyError:
        raise ParseError(f"missing field {_join(path, key)}") from None


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _object(obj: Any, key: str, path: str) -> Dict[str, Any]:
    value = _field(obj, key, path)
    if not isinstance(value, dict):
        raise ParseError(f"{_join(path, key)} must be an object")
    return value


def _array(obj: Any, key: str, path: str) -> List[Any]:
    value = _field(obj, key, path)
    if not isinstance(value, list):
        raise ParseError(f"{_join(path, key)} must be an array")
    return value


def _text(obj: Any, key: str, path: str) -> str:
    # strings stay verbatim, numbers keep their json rendering ("6", "6.0")
    value = _field(obj, key, path)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ParseError(f"{_join(path, key)} must be text or a number")


def parse_days(data: Dict[str, Any]) -> List[WeatherRecord]:
    # weatherAPI shape: data["forecast"]["forecastday"][i]["day"]["maxtemp_c"]
    days = _array(_object(data, "forecast", ""), "forecastday", "forecast")
    city = _text(_object(data, "location", ""), "name", "location")

    records = []
    for i, day in enumerate(days):
        path = f"forecast.forecastday[{i}]"
        aggregate = _object(day, "day", path)
        condition = _object(aggregate, "condition", f"{path}.day")
        records.append(WeatherRecord(
            city=city,
            timestamp=_text(day, "date", path),
            condition_text=_text(condition, "text", f"{path}.day.condition"),
            current_temp="",
            max_temp=_text(aggregate, "maxtemp_c", f"{path}.day"),
            min_temp=_text(aggregate, "mintemp_c", f"{path}.day"),
            icon_url=_text(condition, "icon", f"{path}.day.condition"),
            # handed to the hourly view untouched
            hours_payload=json.dumps(_array(day, "hour", path), separators=(",", ":"), ensure_ascii=False),
        ))
    return records


def parse_current(data: Dict[str, Any], today: WeatherRecord) -> WeatherRecord:
    # the current block has no max/min/hours, those always come from today's aggregate
    current = _object(data, "current", "")
    condition = _object(current, "condition", "current")
    return WeatherRecord(
        city=_text(_object(data, "location", ""), "name", "location"),
        timestamp=_text(current, "last_updated", "current"),
        condition_text=_text(condition, "text", "current.condition"),
        current_temp=_text(current, "temp_c", "current"),
        max_temp=today.max_temp,
        min_temp=today.min_temp,
        icon_url=_text(condition, "icon", "current.condition"),
        hours_payload=today.hours_payload,
    )


def normalize(data: Any) -> Tuple[List[WeatherRecord], WeatherRecord]:
    # both structures or an exception, never one without the other
    if not isinstance(data, dict):
        raise ParseError("payload is not a json object")
    days = parse_days(data)
    if not days:
        raise ParseError("forecast.forecastday is empty, no day to borrow max/min from")
    return days, parse_current(data, days[0])


def parse_weather_data(body: str) -> Tuple[List[WeatherRecord], WeatherRecord]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ParseError(f"response body is not valid json: {exc}") from exc
    return normalize(data)


def parse_hours(record: WeatherRecord) -> List[HourRecord]:
    # decode the opaque hours payload for the hourly view
    try:
        hours = json.loads(record.hours_payload)
    except ValueError as exc:
        raise ParseError(f"hours payload for {record.timestamp} is not valid json: {exc}") from exc
    if not isinstance(hours, list):
        raise ParseError(f"hours payload for {record.timestamp} must be an array")

    result = []
    for i, hour in enumerate(hours):
        path = f"hour[{i}]"
        condition = _object(hour, "condition", path)
        result.append(HourRecord(
            city=record.city,
            timestamp=_text(hour, "time", path),
            condition_text=_text(condition, "text", f"{path}.condition"),
            current_temp=_text(hour, "temp_c", path),
            icon_url=_text(condition, "icon", f"{path}.condition"),
        ))
    return result
