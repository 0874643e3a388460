import pytest
from click.testing import CliRunner

from vaer.cli import cli


def test_run_with_mock_data() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["forecast", "run", "--city", "Sofia", "--mock", "--seed", "3"]
    )

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert sum("C to " in line for line in lines) == 10
    assert any(line.startswith("  Now: dew point") for line in lines)


def test_run_with_no_days() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["forecast", "run", "--city", "Sofia", "--mock", "--days", "0"]
    )

    assert result.exit_code == 0, result.output
    assert "No weather data available." in result.output.splitlines()


def test_latitude_without_longitude() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["forecast", "run", "--mock", "--latitude", "42.7"])

    assert result.exit_code == 2
    assert "must be given together" in result.output


def test_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAER_API_URL", "https://weather.example.com/timeline")
    monkeypatch.setenv("VAER_API_KEY", "secret")
    monkeypatch.setenv("VAER_API_ELEMENTS", "temp")
    runner = CliRunner()

    result = runner.invoke(cli, ["forecast", "url", "Sofia"])

    assert result.exit_code == 0, result.output
    assert (
        "https://weather.example.com/timeline/Sofia/today"
        "?unitGroup=metric&elements=temp&key=secret&contentType=json"
    ) in result.output.splitlines()


def test_url_invalid_place(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAER_API_KEY", "secret")
    runner = CliRunner()

    result = runner.invoke(cli, ["forecast", "url", " "])

    assert result.exit_code == 1
    assert "place name is empty" in result.output


def test_debug_logging() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["--debug", "forecast", "run", "--city", "Oslo", "--mock", "--days", "0"]
    )

    assert result.exit_code == 0, result.output
    assert "No weather data available." in result.output.splitlines()
    assert "Forecast run finished" in result.output


def test_commands_are_registered() -> None:
    assert set(cli.commands) == {"forecast"}
    assert set(cli.commands["forecast"].commands) == {"run", "url"}
