import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from boxbox.schemas.league import GrandPrix, ManualOverride, OfficialResult, Result
from boxbox.services import repository as repo
from boxbox.services.scoring import calculate_gp_score

logger = logging.getLogger(__name__)

SESSION_ORDER = ("quali", "sprint", "race")


def detect_published_sessions(gp: GrandPrix, result: Result) -> List[str]:
    """Session groups a result carries data for."""
    sessions = []
    if result.pole:
        sessions.append("quali")
    if gp.has_sprint and (result.sprint_pole or any(result.sprint_podium or ())):
        sessions.append("sprint")
    if any(result.race_podium or ()) or result.fastest_lap or result.driver_of_the_day:
        sessions.append("race")
    return sessions


def build_official_result(
    gp: GrandPrix,
    result: Result,
    previous: Optional[OfficialResult] = None,
    overrides: Optional[Dict[str, ManualOverride]] = None,
    published_at: Optional[datetime] = None,
) -> OfficialResult:
    """
    Merge a (partial) result into what was already published. Only the fields
    set on `result` replace published ones; sessions only ever get added and
    overrides accumulate per field.
    """
    fields = {}
    if previous:
        fields = previous.model_dump(include=set(Result.model_fields) - {"gp_id"})
    fields.update(result.model_dump(exclude_unset=True, exclude={"gp_id"}))
    merged = Result(gp_id=gp.id, **fields)

    sessions = set(previous.published_sessions if previous else [])
    sessions.update(detect_published_sessions(gp, merged))

    merged_overrides = dict(previous.manual_overrides) if previous else {}
    merged_overrides.update(overrides or {})

    return OfficialResult(
        **merged.model_dump(),
        published_at=published_at or datetime.now(timezone.utc),
        published_sessions=[s for s in SESSION_ORDER if s in sessions],
        manual_overrides=merged_overrides,
    )


def store_gp_scores(db: Session, gp: GrandPrix, result: OfficialResult) -> int:
    """Write every user's GpScore for one GP into the score cache."""
    predictions = repo.list_predictions(db, gp_id=gp.id)
    scores = [(p.user_id, calculate_gp_score(gp, p, result)) for p in predictions]
    written = repo.save_gp_scores(db, scores)
    logger.info("Cached %d scores for GP %s (%s)", written, gp.id, gp.name)
    return written


def publish_result(
    db: Session,
    gp: GrandPrix,
    result: Result,
    overrides: Optional[Dict[str, ManualOverride]] = None,
) -> OfficialResult:
    previous = repo.get_official_result(db, gp.id)
    official = build_official_result(gp, result, previous, overrides)
    saved = repo.save_official_result(db, official)
    store_gp_scores(db, gp, saved)
    db.commit()
    logger.info("Published GP %s: sessions=%s", gp.id, saved.published_sessions)
    return saved
