from datetime import date

import pytest

from ana_scraper.models import CabinClass, Credentials, Query, SearchReport, Leg


def test_query_normalizes_airport_codes():
    query = Query(origin=" tyo", destination="sfo ", depart_date=date(2025, 12, 15), one_way=True)
    assert query.origin == "TYO"
    assert query.destination == "SFO"


def test_query_is_immutable():
    query = Query(origin="TYO", destination="SFO", depart_date=date(2025, 12, 15), one_way=True)
    with pytest.raises(Exception):
        query.origin = "NRT"


def test_round_trip_requires_return_date():
    with pytest.raises(ValueError):
        Query(origin="TYO", destination="SFO", depart_date=date(2025, 12, 15))


def test_return_before_departure_rejected():
    with pytest.raises(ValueError):
        Query(
            origin="TYO",
            destination="SFO",
            depart_date=date(2025, 12, 15),
            return_date=date(2025, 12, 10),
        )


@pytest.mark.parametrize("origin, destination", [("TY", "SFO"), ("TYO", "S1O"), ("TYO", "TYO")])
def test_bad_airport_codes_rejected(origin, destination):
    with pytest.raises(ValueError):
        Query(origin=origin, destination=destination, depart_date=date(2025, 12, 15), one_way=True)


def test_passenger_count_must_be_positive():
    with pytest.raises(ValueError):
        Query(origin="TYO", destination="SFO", depart_date=date(2025, 12, 15), one_way=True, passengers=0)


def test_one_way_second_segment_reuses_departure():
    query = Query(
        origin="TYO",
        destination="SFO",
        depart_date=date(2025, 12, 15),
        return_date=date(2025, 12, 22),
        one_way=True,
    )
    assert query.return_or_departure_date() == date(2025, 12, 15)


def test_round_trip_second_segment_uses_return():
    query = Query(
        origin="TYO",
        destination="SFO",
        depart_date=date(2025, 12, 15),
        return_date=date(2025, 12, 22),
    )
    assert query.departure_date() == date(2025, 12, 15)
    assert query.return_or_departure_date() == date(2025, 12, 22)
    assert query.cabin is CabinClass.ECONOMY


@pytest.mark.parametrize(
    "username, password, complete",
    [("1234567890", "secret", True), ("", "secret", False), ("1234567890", "", False), ("", "", False)],
)
def test_credentials_completeness(username, password, complete):
    assert Credentials(username, password).is_complete is complete


def test_credentials_repr_hides_password():
    assert "hunter2" not in repr(Credentials("1234567890", "hunter2"))


def test_credentials_from_env(monkeypatch):
    monkeypatch.setenv("ANA_USERNAME", "4000000001")
    monkeypatch.setenv("ANA_PASSWORD", "pw")
    creds = Credentials.from_env()
    assert creds.username == "4000000001"
    assert creds.password == "pw"


def test_credentials_from_env_missing(monkeypatch):
    monkeypatch.delenv("ANA_USERNAME", raising=False)
    monkeypatch.delenv("ANA_PASSWORD", raising=False)
    assert not Credentials.from_env().is_complete


def test_search_report_leg_names(tmp_path):
    query = Query(origin="TYO", destination="SFO", depart_date=date(2025, 12, 15), one_way=True)
    report = SearchReport(query=query, output_dir=tmp_path, legs=[Leg.OUTBOUND])
    assert report.leg_names == ["outbound"]
