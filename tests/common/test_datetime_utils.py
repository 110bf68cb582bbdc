from datetime import timedelta, timezone

from src.attendance_kiosk.attendance_kiosk.common import datetime_utils
from src.attendance_kiosk.attendance_kiosk.common.datetime_utils import as_utc, day_of_week, today_in
from tests.fakes import MONDAY, TUESDAY, at


def test_today_in_uses_schedule_timezone(monkeypatch):
    # Monday 23:30 UTC is already Tuesday in UTC+7.
    monkeypatch.setattr(datetime_utils, "now_utc", lambda: at(MONDAY, 23, 30))

    assert today_in(timezone.utc) == MONDAY
    assert today_in(timezone(timedelta(hours=7))) == TUESDAY


def test_today_in_ignores_host_timezone(monkeypatch, new_york_host):
    # 02:00 UTC Tuesday is still Monday evening on the host.
    monkeypatch.setattr(datetime_utils, "now_utc", lambda: at(TUESDAY, 2, 0))

    assert today_in(timezone.utc) == TUESDAY


def test_as_utc_treats_naive_values_as_utc(new_york_host):
    naive = at(MONDAY, 9, 5).replace(tzinfo=None)

    assert as_utc(naive) == at(MONDAY, 9, 5)


def test_day_of_week_starts_on_sunday():
    assert day_of_week(MONDAY) == 1
    assert day_of_week(MONDAY - timedelta(days=1)) == 0
