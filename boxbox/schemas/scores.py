from typing import List, Optional
from pydantic import BaseModel, Field

from boxbox.schemas.league import PointAdjustment


class LockStatus(BaseModel):
    is_race_locked: bool
    is_sprint_locked: bool


class ScoreBreakdown(BaseModel):
    pole: int = 0
    sprint_pole: int = 0
    sprint_podium: int = 0
    race_podium: int = 0
    fastest_lap: int = 0
    driver_of_the_day: int = 0

    def total(self) -> int:
        return sum(self.model_dump().values())


class GpScore(BaseModel):
    gp_id: int
    gp_name: str = ""
    total_points: int
    breakdown: ScoreBreakdown


class ScoreDetail(BaseModel):
    exact_pole: int = 0
    exact_p1: int = 0
    exact_fastest_lap: int = 0


class SeasonTotal(BaseModel):
    user_id: str
    user_username: str
    total_points: int = 0
    details: ScoreDetail = Field(default_factory=ScoreDetail)
    point_adjustments: List[PointAdjustment] = Field(default_factory=list)


class GpStanding(BaseModel):
    user_id: str
    user_username: str
    points: int
    breakdown: ScoreBreakdown
    details: ScoreDetail  # 0/1 flags for this GP


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    gp_id: Optional[int] = None  # GP that earned it, if any
