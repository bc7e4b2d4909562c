from typing import Dict, Iterable, List, Optional

from boxbox.core.rules import ACHIEVEMENTS, NOSTRADAMUS_MIN_HITS, VETERAN_MIN_GPS
from boxbox.schemas.league import GrandPrix, OfficialResult, Prediction, Tournament, User
from boxbox.schemas.scores import Achievement
from boxbox.services.scoring import calculate_gp_score, count_exact_hits, exact_hits
from boxbox.services.standings import grand_prix_for_result


def _award(achievement_id: str, gp_id: Optional[int] = None) -> Achievement:
    name, description = ACHIEVEMENTS[achievement_id]
    return Achievement(id=achievement_id, name=name, description=description, gp_id=gp_id)


def evaluate_achievements(
    user_id: str,
    predictions: Iterable[Prediction],
    official_results: Iterable[OfficialResult],
    schedule: Optional[Iterable[GrandPrix]] = None,
    tournaments: Iterable[Tournament] = (),
    users: Optional[Iterable[User]] = None,
) -> List[Achievement]:
    """
    Achievements earned by one user. GP-bound achievements are awarded once,
    for the first GP (by id) that earned them. When `users` is given, only
    their predictions compete for the top score of a GP.
    """
    known = {u.id for u in users} if users is not None else None
    gp_lookup = {gp.id: gp for gp in schedule} if schedule is not None else None
    by_gp: Dict[int, List[Prediction]] = {}
    for p in predictions:
        by_gp.setdefault(p.gp_id, []).append(p)

    earned: Dict[str, Achievement] = {}
    played = 0
    for result in sorted(official_results, key=lambda r: r.gp_id):
        gp_predictions = by_gp.get(result.gp_id, [])
        mine = next((p for p in gp_predictions if p.user_id == user_id), None)
        if mine is None:
            continue
        played += 1
        gp = grand_prix_for_result(result, gp_lookup)

        scores = {
            p.user_id: calculate_gp_score(gp, p, result).total_points
            for p in gp_predictions
            if known is None or p.user_id in known or p.user_id == user_id
        }
        if scores[user_id] > 0 and scores[user_id] == max(scores.values()):
            earned.setdefault("driver_of_the_weekend", _award("driver_of_the_weekend", gp.id))

        hits = exact_hits(mine, result)
        if hits.exact_pole and hits.exact_p1 and hits.exact_fastest_lap:
            earned.setdefault("hat_trick", _award("hat_trick", gp.id))

        if result.race_podium and mine.race_podium and all(
            bool(a) and a == p for a, p in zip(result.race_podium, mine.race_podium)
        ):
            earned.setdefault("perfect_podium", _award("perfect_podium", gp.id))

        if count_exact_hits(gp, mine, result) >= NOSTRADAMUS_MIN_HITS:
            earned.setdefault("nostradamus", _award("nostradamus", gp.id))

    if played >= VETERAN_MIN_GPS:
        earned["veteran"] = _award("veteran")
    if any(t.creator_id == user_id for t in tournaments):
        earned["league_creator"] = _award("league_creator")

    return [earned[a] for a in ACHIEVEMENTS if a in earned]
