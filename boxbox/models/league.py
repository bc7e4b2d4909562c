from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, UniqueConstraint, Index,
)
from sqlalchemy.orm import relationship
from boxbox.db.base import Base


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True)
    username = Column(String, nullable=False, unique=True)
    email = Column(String, nullable=True, unique=True)
    role = Column(String, nullable=False, default="user")  # user | admin

class Driver(Base):
    __tablename__ = "drivers"
    id = Column(String, primary_key=True)       # e.g. "verstappen"
    name = Column(String, nullable=False)
    team_id = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

class GrandPrix(Base):
    __tablename__ = "grand_prix"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    country = Column(String, nullable=True)
    track = Column(String, nullable=True)
    has_sprint = Column(Boolean, nullable=False, default=False)

    # Scheduled session starts (UTC)
    quali_at = Column(DateTime(timezone=True), nullable=False)
    race_at = Column(DateTime(timezone=True), nullable=False)
    sprint_quali_at = Column(DateTime(timezone=True), nullable=True)
    sprint_at = Column(DateTime(timezone=True), nullable=True)

class Prediction(Base):
    __tablename__ = "predictions"
    __table_args__ = (UniqueConstraint("user_id", "gp_id", name="unique_prediction_user_gp"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    gp_id = Column(Integer, ForeignKey("grand_prix.id", ondelete="CASCADE"), nullable=False, index=True)

    # Driver ids; podiums are [p1, p2, p3] with nullable slots
    pole = Column(String, nullable=True)
    sprint_pole = Column(String, nullable=True)
    sprint_podium = Column(JSON, nullable=True)
    race_podium = Column(JSON, nullable=True)
    fastest_lap = Column(String, nullable=True)
    driver_of_the_day = Column(String, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)

class OfficialResult(Base):
    __tablename__ = "official_results"
    gp_id = Column(Integer, ForeignKey("grand_prix.id", ondelete="CASCADE"), primary_key=True)
    pole = Column(String, nullable=True)
    sprint_pole = Column(String, nullable=True)
    sprint_podium = Column(JSON, nullable=True)
    race_podium = Column(JSON, nullable=True)
    fastest_lap = Column(String, nullable=True)
    driver_of_the_day = Column(String, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    published_sessions = Column(JSON, nullable=False, default=list)  # subset of quali/sprint/race
    manual_overrides = Column(JSON, nullable=False, default=dict)    # field -> {editor_name, reason}

    grand_prix = relationship("GrandPrix")

class PointAdjustment(Base):
    __tablename__ = "point_adjustments"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    points = Column(Integer, nullable=False)
    reason = Column(String, nullable=False)
    admin_id = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=True)

class Tournament(Base):
    __tablename__ = "tournaments"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    invite_code = Column(String, nullable=True, unique=True)
    creator_id = Column(String, ForeignKey("users.id"), nullable=False)
    member_ids = Column(JSON, nullable=False, default=list)
    pending_member_ids = Column(JSON, nullable=False, default=list)

class GpScore(Base):
    """Per-user score cache written after a result is published."""
    __tablename__ = "gp_scores"
    __table_args__ = (
        UniqueConstraint("user_id", "gp_id", name="unique_score_user_gp"),
        Index("ix_gp_scores_gp", "gp_id"),
    )
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    gp_id = Column(Integer, ForeignKey("grand_prix.id", ondelete="CASCADE"), nullable=False)
    total_points = Column(Integer, nullable=False)
    breakdown = Column(JSON, nullable=False)
    computed_at = Column(DateTime(timezone=True), nullable=True)
