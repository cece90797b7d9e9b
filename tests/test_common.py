import datetime as dt

from certstatus.common import format_time, human_duration, iso_utc


def test_iso_utc_naive_and_aware():
    naive = dt.datetime(2024, 5, 1, 12, 0, 0, 123456)
    assert iso_utc(naive) == "2024-05-01T12:00:00Z"
    paris = dt.timezone(dt.timedelta(hours=2))
    assert iso_utc(dt.datetime(2024, 5, 1, 14, 0, tzinfo=paris)) == "2024-05-01T12:00:00Z"


def test_format_time_none():
    assert format_time(None) == "<none>"


def test_human_duration():
    assert human_duration(dt.timedelta(seconds=5)) == "5s"
    assert human_duration(dt.timedelta(seconds=119)) == "119s"
    assert human_duration(dt.timedelta(minutes=90)) == "90m"
    assert human_duration(dt.timedelta(hours=30)) == "30h"
    assert human_duration(dt.timedelta(days=10)) == "10d"
    assert human_duration(dt.timedelta(days=800)) == "2y"
    assert human_duration(dt.timedelta(seconds=-1)) == "<invalid>"
