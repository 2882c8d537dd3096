# connects input (device location or a place name) to the service and prints the cards

from __future__ import annotations
import argparse
import dataclasses
import sys
from typing import List, Optional

from .config import Settings
from .errors import WeatherAppError
from .location import IPLocationProvider, LocationProvider, StaticLocationProvider
from .logging_config import setup_logging
from .models import ForecastSnapshot, icon_href, max_min_line, temperature_line
from .parser import parse_hours
from .service import WeatherService


def _coords(value: str) -> StaticLocationProvider:
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {value!r}") from None
    return StaticLocationProvider(lat, lon)


def render(snapshot: ForecastSnapshot, hours: bool = False) -> List[str]:
    current = snapshot.current
    lines = [
        f"{current.city}  {current.timestamp}",
        f"{temperature_line(current)}  {current.condition_text}",
    ]
    extra = max_min_line(current)
    if extra:
        lines.append(extra)
    lines.append(icon_href(current.icon_url))

    lines.append("")
    lines.append("Days")
    for day in snapshot.days:
        lines.append(f"  {day.timestamp}  {temperature_line(day):<14} {day.condition_text}")

    if hours:
        lines.append("")
        lines.append("Hours")
        for hour in parse_hours(snapshot.days[0]):
            lines.append(f"  {hour.timestamp}  {hour.current_temp}°C  {hour.condition_text}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="weatherapp", description="Current weather and forecast")
    where = parser.add_mutually_exclusive_group()
    where.add_argument("--city", help="place name to search for")
    where.add_argument("--coords", type=_coords, help="LAT,LON instead of the detected location")
    parser.add_argument("--days", type=int, help="number of forecast days (1-10)")
    parser.add_argument("--hours", action="store_true", help="also print today's hourly forecast")
    parser.add_argument("--log-level", help="logging level, defaults to WEATHERAPP_LOG_LEVEL")
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.days is not None:
            settings = dataclasses.replace(settings, days=args.days)
        setup_logging(args.log_level or settings.log_level)

        provider: LocationProvider = args.coords or IPLocationProvider()
        with WeatherService.from_settings(settings, provider) as service:
            if args.city is not None:
                snapshot = service.search_by_name(args.city)
            else:
                snapshot = service.refresh_from_device()
            # printed here, not from an observer, so a render error sets the exit code
            if snapshot is not None:
                print("\n".join(render(snapshot, hours=args.hours)))
    except WeatherAppError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
