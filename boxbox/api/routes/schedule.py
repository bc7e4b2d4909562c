from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from boxbox.db.session import get_db
from boxbox.schemas.requests import ScheduleEntry
from boxbox.schemas.scores import LockStatus
from boxbox.services import repository as repo
from boxbox.services.locks import get_lock_status

router = APIRouter()

@router.get("", response_model=List[ScheduleEntry])
def schedule(db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    out = []
    for gp in repo.list_schedule(db):
        lock = get_lock_status(gp, now)
        out.append({
            "id": gp.id,
            "name": gp.name,
            "has_sprint": gp.has_sprint,
            "is_race_locked": lock.is_race_locked,
            "is_sprint_locked": lock.is_sprint_locked,
        })
    return out

@router.get("/{gp_id}/lock-status", response_model=LockStatus)
def lock_status(
    gp_id: int,
    at: Optional[datetime] = Query(None, description="ISO-8601 instant; defaults to now"),
    db: Session = Depends(get_db),
):
    gp = repo.get_grand_prix(db, gp_id)
    if gp is None:
        raise HTTPException(404, detail=f"Grand Prix {gp_id} not found")
    return get_lock_status(gp, at or datetime.now(timezone.utc))
