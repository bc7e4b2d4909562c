from datetime import datetime, timedelta

from boxbox.core.rules import LOCK_MINUTES_BEFORE
from boxbox.schemas.league import GrandPrix, as_utc
from boxbox.schemas.scores import LockStatus


def lock_time(session_start: datetime) -> datetime:
    return as_utc(session_start) - timedelta(minutes=LOCK_MINUTES_BEFORE)


def get_lock_status(gp: GrandPrix, now: datetime) -> LockStatus:
    """
    Whether the race form and the sprint form of a GP are closed at `now`.

    The race form also carries the pole prediction, so it closes ahead of
    qualifying. The sprint form closes ahead of the sprint shootout, or of
    qualifying when no shootout time is scheduled. A GP without sprint has
    no sprint form and reports it as locked.
    """
    now = as_utc(now)
    is_race_locked = now > lock_time(gp.events.quali)

    is_sprint_locked = True
    if gp.has_sprint:
        sprint_start = gp.events.sprint_quali or gp.events.quali
        is_sprint_locked = now > lock_time(sprint_start)

    return LockStatus(is_race_locked=is_race_locked, is_sprint_locked=is_sprint_locked)
