from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from boxbox.schemas.league import ManualOverride, Podium, Result

MAIN_FORM_FIELDS = ("pole", "race_podium", "fastest_lap", "driver_of_the_day")
SPRINT_FORM_FIELDS = ("sprint_pole", "sprint_podium")


class PredictionIn(BaseModel):
    user_id: str
    pole: Optional[str] = None
    sprint_pole: Optional[str] = None
    sprint_podium: Optional[Podium] = None
    race_podium: Optional[Podium] = None
    fastest_lap: Optional[str] = None
    driver_of_the_day: Optional[str] = None

    @field_validator("sprint_podium", "race_podium")
    @classmethod
    def _no_repeated_driver(cls, v):
        if v is not None:
            picked = [d for d in v if d]
            if len(picked) != len(set(picked)):
                raise ValueError("a driver can only appear once on the podium")
        return v


class PublishResultIn(BaseModel):
    pole: Optional[str] = None
    sprint_pole: Optional[str] = None
    sprint_podium: Optional[Podium] = None
    race_podium: Optional[Podium] = None
    fastest_lap: Optional[str] = None
    driver_of_the_day: Optional[str] = None
    manual_overrides: Dict[str, ManualOverride] = Field(default_factory=dict)

    def to_result(self, gp_id: int) -> Result:
        # Only fields the admin sent replace the published ones
        return Result(gp_id=gp_id, **self.model_dump(exclude_unset=True, exclude={"manual_overrides"}))


class AdjustmentIn(BaseModel):
    user_id: str
    points: int
    reason: str
    admin_id: str


class ScheduleEntry(BaseModel):
    id: int
    name: str
    has_sprint: bool
    is_race_locked: bool
    is_sprint_locked: bool


class CachedScore(BaseModel):
    user_id: str
    total_points: int


class PublishResponse(BaseModel):
    gp_id: int
    published_sessions: List[str]
    scores: List[CachedScore]
