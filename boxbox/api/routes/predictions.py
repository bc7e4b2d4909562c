from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boxbox.db.session import get_db
from boxbox.schemas.league import Prediction
from boxbox.schemas.requests import MAIN_FORM_FIELDS, SPRINT_FORM_FIELDS, PredictionIn
from boxbox.schemas.scores import GpScore
from boxbox.services import repository as repo
from boxbox.services.locks import get_lock_status
from boxbox.services.scoring import calculate_gp_score

router = APIRouter()

def _picked_drivers(payload: PredictionIn, fields):
    for field in fields:
        value = getattr(payload, field)
        if isinstance(value, tuple):
            yield from (d for d in value if d)
        elif value:
            yield value

@router.put("/{gp_id}", response_model=Prediction)
def submit_prediction(gp_id: int, payload: PredictionIn, db: Session = Depends(get_db)):
    """
    Create or update a user's prediction. Only the fields sent are changed;
    fields of a locked form are rejected with 403.
    """
    gp = repo.get_grand_prix(db, gp_id)
    if gp is None:
        raise HTTPException(404, detail=f"Grand Prix {gp_id} not found")
    if payload.user_id not in {u.id for u in repo.list_users(db)}:
        raise HTTPException(404, detail=f"User '{payload.user_id}' not found")

    now = datetime.now(timezone.utc)
    lock = get_lock_status(gp, now)
    sent = payload.model_fields_set - {"user_id"}
    if not gp.has_sprint:
        sent -= set(SPRINT_FORM_FIELDS)

    if lock.is_race_locked and sent & set(MAIN_FORM_FIELDS):
        raise HTTPException(403, detail="Race predictions are locked")
    if lock.is_sprint_locked and sent & set(SPRINT_FORM_FIELDS):
        raise HTTPException(403, detail="Sprint predictions are locked")

    # Retired drivers stay valid in old results but cannot be picked
    active = {d.id for d in repo.list_drivers(db, active_only=True)}
    unknown = sorted(d for d in _picked_drivers(payload, sent) if d not in active)
    if unknown:
        raise HTTPException(422, detail=f"Unknown or inactive drivers: {', '.join(unknown)}")

    current = repo.get_prediction(db, gp_id, payload.user_id) or Prediction(user_id=payload.user_id, gp_id=gp_id)
    update = {field: getattr(payload, field) for field in sent}
    update["submitted_at"] = now
    saved = repo.save_prediction(db, current.model_copy(update=update))
    db.commit()
    return saved

@router.get("/{gp_id}/{user_id}/score", response_model=GpScore)
def prediction_score(gp_id: int, user_id: str, db: Session = Depends(get_db)):
    gp = repo.get_grand_prix(db, gp_id)
    if gp is None:
        raise HTTPException(404, detail=f"Grand Prix {gp_id} not found")
    result = repo.get_official_result(db, gp_id)
    if result is None:
        raise HTTPException(404, detail=f"No official result for Grand Prix {gp_id}")
    prediction = repo.get_prediction(db, gp_id, user_id)
    if prediction is None:
        raise HTTPException(404, detail=f"No prediction from '{user_id}' for Grand Prix {gp_id}")
    return calculate_gp_score(gp, prediction, result)
