from weatherapp import cli
from weatherapp.client import WeatherAPIClient
from weatherapp.parser import normalize
from weatherapp.store import ForecastStore

URL = WeatherAPIClient.BASE_URL


def test_render(payload):
    days, current = normalize(payload)
    store = ForecastStore()
    snapshot = store.publish(store.begin(), days, current)

    lines = cli.render(snapshot, hours=True)

    assert lines[0] == "Moscow  2024-01-01 12:00"
    assert lines[1] == "-5.0°C  Light snow"
    assert lines[2] == "-3.4°C / -8.1°C"
    assert lines[3] == "https://cdn.weatherapi.com/weather/64x64/day/326.png"
    assert "  2024-01-02  -1°C / -6°C    Overcast" in lines
    assert "  2024-01-01 01:00  -8.1°C  Overcast" in lines


def test_main_by_city(requests_mock, payload, monkeypatch, capsys):
    monkeypatch.setenv("WEATHERAPI_KEY", "secret")
    requests_mock.get(URL, json=payload)

    assert cli.main(["--city", "Moscow", "--days", "3"]) == 0

    out = capsys.readouterr().out
    assert "Moscow  2024-01-01 12:00" in out
    assert "Days" in out
    assert "Hours" not in out


def test_main_by_coords(requests_mock, payload, monkeypatch):
    monkeypatch.setenv("WEATHERAPI_KEY", "secret")
    requests_mock.get(URL, json=payload)

    assert cli.main(["--coords", "55.75,37.62"]) == 0
    assert requests_mock.last_request.qs["q"] == ["55.75,37.62"]


def test_main_reports_errors(requests_mock, monkeypatch, capsys):
    monkeypatch.setenv("WEATHERAPI_KEY", "secret")
    requests_mock.get(URL, status_code=400, text='{"error":{"message":"No matching location found."}}')

    assert cli.main(["--city", "Nowhere"]) == 1
    assert "No matching location found." in capsys.readouterr().err


def test_main_rejects_days_out_of_range(monkeypatch, capsys):
    monkeypatch.setenv("WEATHERAPI_KEY", "secret")

    assert cli.main(["--city", "Moscow", "--days", "12"]) == 1
    assert "'days'" in capsys.readouterr().err


def test_main_reports_render_errors(requests_mock, payload, monkeypatch, capsys):
    monkeypatch.setenv("WEATHERAPI_KEY", "secret")
    del payload["forecast"]["forecastday"][0]["hour"][0]["temp_c"]
    requests_mock.get(URL, json=payload)

    # the fetch itself succeeds, only the hourly section cannot be rendered
    assert cli.main(["--city", "Moscow", "--hours"]) == 1
    assert "temp_c" in capsys.readouterr().err
