from datetime import date
from pathlib import Path

import pytest

import ana_scraper.cli as cli
from ana_scraper.exceptions import SiteProcessingError, UnsupportedCabinClassError
from ana_scraper.models import CabinClass, Leg, SearchReport


@pytest.fixture
def no_logging(monkeypatch):
    # Avoid touching real logs/paths during tests
    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)


@pytest.fixture
def fake_runner(monkeypatch):
    """Replace AwardSearchRunner, capturing its inputs"""
    calls = {"init": None, "query": None, "error": None}

    class FakeRunner:
        def __init__(self, credentials, output_dir, headless, delay_policy):
            calls["init"] = {
                "credentials": credentials,
                "output_dir": output_dir,
                "headless": headless,
                "delay_policy": delay_policy,
            }

        async def run(self, query):
            calls["query"] = query
            if calls["error"]:
                raise calls["error"]
            return SearchReport(query=query, output_dir=Path("out"), legs=[Leg.OUTBOUND])

    monkeypatch.setattr(cli, "AwardSearchRunner", FakeRunner)
    return calls


BASE_ARGS = ["--origin", "tyo", "--destination", "SFO", "--date", "2025-12-17"]


def test_one_way_when_no_return_date(no_logging, fake_runner, tmp_path):
    cli.main(BASE_ARGS + ["--output", str(tmp_path), "--log-file", str(tmp_path / "log.log")])

    query = fake_runner["query"]
    assert query.origin == "TYO"
    assert query.one_way is True
    assert query.return_date is None
    assert query.depart_date == date(2025, 12, 17)
    assert fake_runner["init"]["output_dir"] == tmp_path
    assert fake_runner["init"]["headless"] is True


def test_round_trip_with_cabin_and_passengers(no_logging, fake_runner, tmp_path):
    args = BASE_ARGS + [
        "--return-date", "2025-12-22",
        "--passengers", "2",
        "--cabin", "business",
        "--no-headless",
        "--output", str(tmp_path),
    ]
    cli.main(args)

    query = fake_runner["query"]
    assert query.one_way is False
    assert query.return_date == date(2025, 12, 22)
    assert query.passengers == 2
    assert query.cabin is CabinClass.BUSINESS
    assert fake_runner["init"]["headless"] is False


def test_credentials_default_to_environment(no_logging, fake_runner, monkeypatch, tmp_path):
    monkeypatch.setenv("ANA_USERNAME", "4000000001")
    monkeypatch.setenv("ANA_PASSWORD", "from-env")
    cli.main(BASE_ARGS + ["--output", str(tmp_path)])

    creds = fake_runner["init"]["credentials"]
    assert creds.username == "4000000001"
    assert creds.password == "from-env"


def test_delay_bounds_passed_through(no_logging, fake_runner, tmp_path):
    cli.main(BASE_ARGS + ["--min-delay", "0", "--max-delay", "10", "--output", str(tmp_path)])
    policy = fake_runner["init"]["delay_policy"]
    assert (policy.min_ms, policy.max_ms) == (0, 10)


@pytest.mark.parametrize(
    "extra",
    [
        ["--date", "2025-13-40"],
        ["--return-date", "2025-12-01"],
        ["--min-delay", "500", "--max-delay", "100"],
        ["--passengers", "0"],
    ],
)
def test_invalid_input_fails_validation(no_logging, fake_runner, extra, tmp_path):
    with pytest.raises(SystemExit):
        cli.main(BASE_ARGS + extra + ["--output", str(tmp_path)])
    assert fake_runner["query"] is None


@pytest.mark.parametrize(
    "error",
    [UnsupportedCabinClassError(CabinClass.PREMIUM_ECONOMY), SiteProcessingError("There are errors")],
)
def test_scraper_errors_exit_nonzero(no_logging, fake_runner, error, tmp_path):
    fake_runner["error"] = error
    with pytest.raises(SystemExit) as exc:
        cli.main(BASE_ARGS + ["--output", str(tmp_path)])
    assert exc.value.code == 1
