from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

# [p1, p2, p3] driver ids, each slot independently empty
Podium = Tuple[Optional[str], Optional[str], Optional[str]]

SessionGroup = Literal["quali", "sprint", "race"]


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionSchedule(BaseModel):
    quali: datetime
    race: datetime
    sprint_quali: Optional[datetime] = None
    sprint: Optional[datetime] = None

    @field_validator("quali", "race", "sprint_quali", "sprint")
    @classmethod
    def _utc(cls, v):
        return as_utc(v) if v is not None else v


class GrandPrix(BaseModel):
    id: int
    name: str = ""
    country: Optional[str] = None
    track: Optional[str] = None
    has_sprint: bool = False
    events: Optional[SessionSchedule] = None  # None only for GPs rebuilt from a result


class Driver(BaseModel):
    id: str
    name: str
    team_id: Optional[str] = None
    is_active: bool = True


class User(BaseModel):
    id: str
    username: str
    email: Optional[str] = None
    role: Literal["user", "admin"] = "user"


class Prediction(BaseModel):
    user_id: str
    gp_id: int
    pole: Optional[str] = None
    sprint_pole: Optional[str] = None
    sprint_podium: Optional[Podium] = None
    race_podium: Optional[Podium] = None
    fastest_lap: Optional[str] = None
    driver_of_the_day: Optional[str] = None
    submitted_at: Optional[datetime] = None


class Result(BaseModel):
    gp_id: int
    pole: Optional[str] = None
    sprint_pole: Optional[str] = None
    sprint_podium: Optional[Podium] = None
    race_podium: Optional[Podium] = None
    fastest_lap: Optional[str] = None
    driver_of_the_day: Optional[str] = None


class ManualOverride(BaseModel):
    editor_name: str
    reason: str


class OfficialResult(Result):
    published_at: Optional[datetime] = None
    published_sessions: List[SessionGroup] = Field(default_factory=list)
    manual_overrides: Dict[str, ManualOverride] = Field(default_factory=dict)


class PointAdjustment(BaseModel):
    id: Optional[str] = None
    user_id: str
    points: int
    reason: str
    admin_id: str
    timestamp: Optional[datetime] = None


class Tournament(BaseModel):
    id: str
    name: str
    invite_code: Optional[str] = None
    creator_id: str
    member_ids: List[str] = Field(default_factory=list)
    pending_member_ids: List[str] = Field(default_factory=list)
