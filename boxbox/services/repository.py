# boxbox/services/repository.py
"""Data access for the league tables. Returns pydantic schemas, never ORM rows."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from boxbox.models import league as m
from boxbox.schemas import league as s
from boxbox.schemas.scores import GpScore


def _podium(value) -> Optional[tuple]:
    return tuple(value) if value else None

def _to_grand_prix(row: m.GrandPrix) -> s.GrandPrix:
    return s.GrandPrix(
        id=row.id,
        name=row.name,
        country=row.country,
        track=row.track,
        has_sprint=row.has_sprint,
        events=s.SessionSchedule(
            quali=row.quali_at,
            race=row.race_at,
            sprint_quali=row.sprint_quali_at,
            sprint=row.sprint_at,
        ),
    )

def _to_prediction(row: m.Prediction) -> s.Prediction:
    return s.Prediction(
        user_id=row.user_id,
        gp_id=row.gp_id,
        pole=row.pole,
        sprint_pole=row.sprint_pole,
        sprint_podium=_podium(row.sprint_podium),
        race_podium=_podium(row.race_podium),
        fastest_lap=row.fastest_lap,
        driver_of_the_day=row.driver_of_the_day,
        submitted_at=row.submitted_at,
    )

def _to_official_result(row: m.OfficialResult) -> s.OfficialResult:
    return s.OfficialResult(
        gp_id=row.gp_id,
        pole=row.pole,
        sprint_pole=row.sprint_pole,
        sprint_podium=_podium(row.sprint_podium),
        race_podium=_podium(row.race_podium),
        fastest_lap=row.fastest_lap,
        driver_of_the_day=row.driver_of_the_day,
        published_at=row.published_at,
        published_sessions=row.published_sessions or [],
        manual_overrides=row.manual_overrides or {},
    )

def _to_adjustment(row: m.PointAdjustment) -> s.PointAdjustment:
    return s.PointAdjustment(
        id=str(row.id),
        user_id=row.user_id,
        points=row.points,
        reason=row.reason,
        admin_id=row.admin_id,
        timestamp=row.timestamp,
    )

# -----------------------
# Reads
# -----------------------
def list_schedule(db: Session) -> List[s.GrandPrix]:
    rows = db.scalars(select(m.GrandPrix).order_by(m.GrandPrix.quali_at, m.GrandPrix.id)).all()
    return [_to_grand_prix(r) for r in rows]

def get_grand_prix(db: Session, gp_id: int) -> Optional[s.GrandPrix]:
    row = db.get(m.GrandPrix, gp_id)
    return _to_grand_prix(row) if row else None

def get_official_result(db: Session, gp_id: int) -> Optional[s.OfficialResult]:
    row = db.get(m.OfficialResult, gp_id)
    return _to_official_result(row) if row else None

def list_official_results(db: Session) -> List[s.OfficialResult]:
    rows = db.scalars(select(m.OfficialResult).order_by(m.OfficialResult.gp_id)).all()
    return [_to_official_result(r) for r in rows]

def list_predictions(db: Session, gp_id: Optional[int] = None, user_id: Optional[str] = None) -> List[s.Prediction]:
    stmt = select(m.Prediction).order_by(m.Prediction.gp_id, m.Prediction.user_id)
    if gp_id is not None:
        stmt = stmt.where(m.Prediction.gp_id == gp_id)
    if user_id is not None:
        stmt = stmt.where(m.Prediction.user_id == user_id)
    return [_to_prediction(r) for r in db.scalars(stmt).all()]

def get_prediction(db: Session, gp_id: int, user_id: str) -> Optional[s.Prediction]:
    found = list_predictions(db, gp_id=gp_id, user_id=user_id)
    return found[0] if found else None

def list_users(db: Session) -> List[s.User]:
    rows = db.scalars(select(m.User).order_by(m.User.id)).all()
    return [s.User(id=r.id, username=r.username, email=r.email, role=r.role) for r in rows]

def list_drivers(db: Session, active_only: bool = False) -> List[s.Driver]:
    stmt = select(m.Driver).order_by(m.Driver.id)
    if active_only:
        stmt = stmt.where(m.Driver.is_active.is_(True))
    return [
        s.Driver(id=r.id, name=r.name, team_id=r.team_id, is_active=r.is_active)
        for r in db.scalars(stmt).all()
    ]

def list_point_adjustments(db: Session) -> List[s.PointAdjustment]:
    rows = db.scalars(select(m.PointAdjustment).order_by(m.PointAdjustment.id)).all()
    return [_to_adjustment(r) for r in rows]

def _to_tournament(row: m.Tournament) -> s.Tournament:
    return s.Tournament(
        id=row.id,
        name=row.name,
        invite_code=row.invite_code,
        creator_id=row.creator_id,
        member_ids=row.member_ids or [],
        pending_member_ids=row.pending_member_ids or [],
    )

def list_tournaments(db: Session) -> List[s.Tournament]:
    rows = db.scalars(select(m.Tournament).order_by(m.Tournament.id)).all()
    return [_to_tournament(r) for r in rows]

def get_tournament(db: Session, tournament_id: str) -> Optional[s.Tournament]:
    row = db.get(m.Tournament, tournament_id)
    return _to_tournament(row) if row else None

# -----------------------
# Writes (callers commit)
# -----------------------
def save_prediction(db: Session, prediction: s.Prediction) -> s.Prediction:
    row = db.scalars(
        select(m.Prediction).where(
            m.Prediction.user_id == prediction.user_id,
            m.Prediction.gp_id == prediction.gp_id,
        )
    ).first()
    if row is None:
        row = m.Prediction(user_id=prediction.user_id, gp_id=prediction.gp_id)
        db.add(row)
    data = prediction.model_dump(mode="json", exclude={"user_id", "gp_id", "submitted_at"})
    for field, value in data.items():
        setattr(row, field, value)
    row.submitted_at = prediction.submitted_at
    db.flush()
    return _to_prediction(row)

def save_official_result(db: Session, result: s.OfficialResult) -> s.OfficialResult:
    row = db.get(m.OfficialResult, result.gp_id)
    if row is None:
        row = m.OfficialResult(gp_id=result.gp_id)
        db.add(row)
    data = result.model_dump(mode="json", exclude={"gp_id", "published_at"})
    for field, value in data.items():
        setattr(row, field, value)
    row.published_at = result.published_at
    db.flush()
    return _to_official_result(row)

def add_point_adjustment(db: Session, adjustment: s.PointAdjustment) -> s.PointAdjustment:
    row = m.PointAdjustment(
        user_id=adjustment.user_id,
        points=adjustment.points,
        reason=adjustment.reason,
        admin_id=adjustment.admin_id,
        timestamp=adjustment.timestamp or datetime.now(timezone.utc),
    )
    db.add(row)
    db.flush()
    return _to_adjustment(row)

def save_gp_scores(db: Session, user_scores: Iterable[tuple[str, GpScore]]) -> int:
    """Upsert cached (user_id, GpScore) pairs. Returns rows written."""
    now = datetime.now(timezone.utc)
    written = 0
    for user_id, score in user_scores:
        row = db.scalars(
            select(m.GpScore).where(m.GpScore.user_id == user_id, m.GpScore.gp_id == score.gp_id)
        ).first()
        if row is None:
            row = m.GpScore(user_id=user_id, gp_id=score.gp_id)
            db.add(row)
        row.total_points = score.total_points
        row.breakdown = score.breakdown.model_dump()
        row.computed_at = now
        written += 1
    db.flush()
    return written

def list_cached_scores(db: Session, gp_id: int) -> List[tuple[str, int]]:
    rows = db.scalars(select(m.GpScore).where(m.GpScore.gp_id == gp_id).order_by(m.GpScore.user_id)).all()
    return [(r.user_id, r.total_points) for r in rows]
