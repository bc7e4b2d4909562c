import logging
from typing import Dict, Iterable, List, Optional

from boxbox.schemas.league import (
    GrandPrix, OfficialResult, PointAdjustment, Prediction, Tournament, User,
)
from boxbox.schemas.scores import GpStanding, ScoreDetail, SeasonTotal
from boxbox.services.scoring import calculate_gp_score, exact_hits

logger = logging.getLogger(__name__)


def _ranking_key(points: int, details: ScoreDetail, username: str, user_id: str):
    # Points, then exact P1 / pole / fastest lap hits, then name and id
    return (
        -points,
        -details.exact_p1,
        -details.exact_pole,
        -details.exact_fastest_lap,
        username.lower(),
        user_id,
    )


def grand_prix_for_result(result: OfficialResult, schedule: Optional[Dict[int, GrandPrix]] = None) -> GrandPrix:
    """
    The GP to score a result against. A schedule entry is authoritative;
    without one, sprint participation is inferred from the result content.
    """
    if schedule and result.gp_id in schedule:
        return schedule[result.gp_id]
    has_sprint = bool(result.sprint_pole) or bool(result.sprint_podium)
    return GrandPrix(id=result.gp_id, has_sprint=has_sprint)


def calculate_season_standings(
    users: Iterable[User],
    predictions: Iterable[Prediction],
    official_results: Iterable[OfficialResult],
    adjustments: Iterable[PointAdjustment],
    schedule: Optional[Iterable[GrandPrix]] = None,
) -> List[SeasonTotal]:
    """
    Season table recomputed from scratch. Predictions of unknown users or for
    GPs without an official result contribute nothing.
    """
    totals: Dict[str, SeasonTotal] = {
        u.id: SeasonTotal(user_id=u.id, user_username=u.username) for u in users
    }
    gp_lookup = {gp.id: gp for gp in schedule} if schedule is not None else None

    by_gp: Dict[int, List[Prediction]] = {}
    for p in predictions:
        by_gp.setdefault(p.gp_id, []).append(p)

    for result in official_results:
        gp = grand_prix_for_result(result, gp_lookup)
        for pred in by_gp.get(result.gp_id, []):
            total = totals.get(pred.user_id)
            if total is None:
                continue
            total.total_points += calculate_gp_score(gp, pred, result).total_points
            hits = exact_hits(pred, result)
            total.details.exact_pole += hits.exact_pole
            total.details.exact_p1 += hits.exact_p1
            total.details.exact_fastest_lap += hits.exact_fastest_lap

    for adj in adjustments:
        total = totals.get(adj.user_id)
        if total is None:
            logger.debug("Skipping adjustment for unknown user %s", adj.user_id)
            continue
        total.total_points += adj.points
        total.point_adjustments.append(adj)

    return sorted(
        totals.values(),
        key=lambda t: _ranking_key(t.total_points, t.details, t.user_username, t.user_id),
    )


def calculate_gp_standings(
    gp: GrandPrix,
    users: Iterable[User],
    predictions: Iterable[Prediction],
    result: OfficialResult,
) -> List[GpStanding]:
    """Points and exact-hit flags of every known user for a single GP."""
    names = {u.id: u.username for u in users}
    rows = []
    for pred in predictions:
        if pred.gp_id != result.gp_id or pred.user_id not in names:
            continue
        score = calculate_gp_score(gp, pred, result)
        rows.append(GpStanding(
            user_id=pred.user_id,
            user_username=names[pred.user_id],
            points=score.total_points,
            breakdown=score.breakdown,
            details=exact_hits(pred, result),
        ))
    return sorted(rows, key=lambda r: _ranking_key(r.points, r.details, r.user_username, r.user_id))


def tournament_standings(season_totals: Iterable[SeasonTotal], tournament: Tournament) -> List[SeasonTotal]:
    # Pending invitations are not ranked
    members = set(tournament.member_ids)
    return [t for t in season_totals if t.user_id in members]
