from weatherapp.models import Coordinates, WeatherRecord, icon_href, max_min_line, temperature_line


def record(current_temp: str) -> WeatherRecord:
    return WeatherRecord("Moscow", "2024-01-01", "Clear", current_temp, "6.7", "-2.4", "//x/icon.png", "[]")


def test_daily_temperature_line_shows_whole_degree_range():
    day = record("")

    assert temperature_line(day) == "6°C / -2°C"
    assert max_min_line(day) == ""


def test_current_temperature_line():
    current = record("5.0")

    assert temperature_line(current) == "5.0°C"
    assert max_min_line(current) == "6.7°C / -2.4°C"


def test_icon_href():
    assert icon_href("//cdn.weatherapi.com/a.png") == "https://cdn.weatherapi.com/a.png"
    assert icon_href("https://example.com/a.png") == "https://example.com/a.png"


def test_coordinates_query():
    assert Coordinates(55.75, 37.62).as_query() == "55.75,37.62"
