from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from boxbox.db.session import get_db
from boxbox.schemas.league import PointAdjustment
from boxbox.schemas.requests import AdjustmentIn
from boxbox.schemas.scores import Achievement, SeasonTotal
from boxbox.services import repository as repo
from boxbox.services.achievements import evaluate_achievements
from boxbox.services.standings import calculate_season_standings, tournament_standings

router = APIRouter()

def _season_totals(db: Session) -> List[SeasonTotal]:
    return calculate_season_standings(
        repo.list_users(db),
        repo.list_predictions(db),
        repo.list_official_results(db),
        repo.list_point_adjustments(db),
        schedule=repo.list_schedule(db),
    )

@router.get("/season", response_model=List[SeasonTotal])
def season_standings(db: Session = Depends(get_db)):
    """
    Season table, ordered by points (then exact P1, pole and fastest lap hits).
    """
    return _season_totals(db)

@router.get("/tournaments/{tournament_id}", response_model=List[SeasonTotal])
def tournament_leaderboard(tournament_id: str, db: Session = Depends(get_db)):
    tournament = repo.get_tournament(db, tournament_id)
    if tournament is None:
        raise HTTPException(404, detail=f"Tournament '{tournament_id}' not found")
    return tournament_standings(_season_totals(db), tournament)

@router.post("/adjustments", response_model=PointAdjustment, status_code=201)
def add_adjustment(payload: AdjustmentIn, db: Session = Depends(get_db)):
    if payload.user_id not in {u.id for u in repo.list_users(db)}:
        raise HTTPException(404, detail=f"User '{payload.user_id}' not found")
    saved = repo.add_point_adjustment(db, PointAdjustment(**payload.model_dump()))
    db.commit()
    return saved

@router.get("/achievements/{user_id}", response_model=List[Achievement])
def achievements(user_id: str, db: Session = Depends(get_db)):
    users = repo.list_users(db)
    if user_id not in {u.id for u in users}:
        raise HTTPException(404, detail=f"User '{user_id}' not found")
    return evaluate_achievements(
        user_id,
        repo.list_predictions(db),
        repo.list_official_results(db),
        schedule=repo.list_schedule(db),
        tournaments=repo.list_tournaments(db),
        users=users,
    )
