from datetime import datetime, timedelta, timezone

from boxbox.schemas.league import GrandPrix, SessionSchedule
from boxbox.services.locks import get_lock_status

QUALI = datetime(2025, 5, 3, 20, 0, tzinfo=timezone.utc)
SPRINT_QUALI = datetime(2025, 5, 2, 20, 30, tzinfo=timezone.utc)
BOUNDARY = QUALI - timedelta(minutes=5)
ONE_SEC = timedelta(seconds=1)

def make_gp(has_sprint=False, sprint_quali=None):
    return GrandPrix(
        id=6,
        name="Miami Grand Prix",
        has_sprint=has_sprint,
        events=SessionSchedule(
            quali=QUALI,
            race=QUALI + timedelta(days=1),
            sprint_quali=sprint_quali,
            sprint=QUALI - timedelta(hours=4) if has_sprint else None,
        ),
    )

def test_race_lock_boundary():
    gp = make_gp()
    assert get_lock_status(gp, BOUNDARY - ONE_SEC).is_race_locked is False
    assert get_lock_status(gp, BOUNDARY).is_race_locked is False
    assert get_lock_status(gp, BOUNDARY + ONE_SEC).is_race_locked is True

def test_sprint_not_applicable_without_sprint():
    status = get_lock_status(make_gp(), BOUNDARY - timedelta(days=3))
    assert status.is_race_locked is False
    assert status.is_sprint_locked is True

def test_sprint_falls_back_to_quali():
    gp = make_gp(has_sprint=True)
    before = get_lock_status(gp, BOUNDARY - ONE_SEC)
    after = get_lock_status(gp, BOUNDARY + ONE_SEC)
    assert before.is_sprint_locked == before.is_race_locked == False
    assert after.is_sprint_locked == after.is_race_locked == True

def test_sprint_uses_sprint_quali_when_scheduled():
    gp = make_gp(has_sprint=True, sprint_quali=SPRINT_QUALI)
    sprint_boundary = SPRINT_QUALI - timedelta(minutes=5)
    assert get_lock_status(gp, sprint_boundary - ONE_SEC).is_sprint_locked is False
    status = get_lock_status(gp, sprint_boundary + ONE_SEC)
    assert status.is_sprint_locked is True
    assert status.is_race_locked is False

def test_naive_times_read_as_utc():
    gp = GrandPrix(
        id=1,
        name="Australian Grand Prix",
        events={"quali": "2025-03-15T05:00:00", "race": "2025-03-16T04:00:00Z"},
    )
    assert get_lock_status(gp, datetime(2025, 3, 15, 4, 54)).is_race_locked is False
    assert get_lock_status(gp, datetime(2025, 3, 15, 4, 56)).is_race_locked is True
