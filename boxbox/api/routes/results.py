from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boxbox.db.session import get_db
from boxbox.schemas.league import OfficialResult
from boxbox.schemas.requests import PublishResponse, PublishResultIn
from boxbox.schemas.scores import GpStanding
from boxbox.services import repository as repo
from boxbox.services import results as result_service
from boxbox.services.standings import calculate_gp_standings

router = APIRouter()

def _grand_prix_or_404(db: Session, gp_id: int):
    gp = repo.get_grand_prix(db, gp_id)
    if gp is None:
        raise HTTPException(404, detail=f"Grand Prix {gp_id} not found")
    return gp

@router.get("/{gp_id}", response_model=OfficialResult)
def official_result(gp_id: int, db: Session = Depends(get_db)):
    result = repo.get_official_result(db, gp_id)
    if result is None:
        raise HTTPException(404, detail=f"No official result for Grand Prix {gp_id}")
    return result

@router.post("/{gp_id}/publish", response_model=PublishResponse)
def publish(gp_id: int, payload: PublishResultIn, db: Session = Depends(get_db)):
    """Publish (or re-publish) a result and refresh the cached GP scores."""
    gp = _grand_prix_or_404(db, gp_id)
    saved = result_service.publish_result(db, gp, payload.to_result(gp_id), payload.manual_overrides)
    return {
        "gp_id": gp_id,
        "published_sessions": saved.published_sessions,
        "scores": [
            {"user_id": user_id, "total_points": points}
            for user_id, points in repo.list_cached_scores(db, gp_id)
        ],
    }

@router.get("/{gp_id}/standings", response_model=List[GpStanding])
def gp_standings(gp_id: int, db: Session = Depends(get_db)):
    gp = _grand_prix_or_404(db, gp_id)
    result = repo.get_official_result(db, gp_id)
    if result is None:
        return []
    return calculate_gp_standings(gp, repo.list_users(db), repo.list_predictions(db, gp_id=gp_id), result)
