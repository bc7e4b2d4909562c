"""
Scoring of one prediction against one official result.

Shared by the API and by the post-publish batch job
(scripts/score_published_result.py); there is no second copy of these rules.
"""
from typing import Dict, Optional

from boxbox.core.rules import PODIUM_SLOTS, SCORING_RULES as RULES
from boxbox.schemas.league import GrandPrix, Podium, Prediction, Result
from boxbox.schemas.scores import GpScore, ScoreBreakdown, ScoreDetail


def _same(actual: Optional[str], predicted: Optional[str]) -> bool:
    # An empty value on either side is never a hit
    return bool(actual) and actual == predicted


def podium_points(predicted: Optional[Podium], actual: Optional[Podium], rules: Dict[str, int]) -> int:
    """
    Each predicted slot is scored on its own: the exact-slot value when the
    driver finished in that slot, otherwise the in-podium bonus when the
    driver finished in any other podium slot. A driver repeated in several
    slots is evaluated once per slot.
    """
    if not predicted or not actual:
        return 0
    points = 0
    for i, driver_id in enumerate(predicted):
        if not driver_id:
            continue
        if _same(actual[i], driver_id):
            points += rules[PODIUM_SLOTS[i]]
        elif driver_id in actual:
            points += rules["in_podium"]
    return points


def calculate_gp_score(gp: GrandPrix, prediction: Prediction, result: Result) -> GpScore:
    breakdown = ScoreBreakdown()

    if _same(result.pole, prediction.pole):
        breakdown.pole = RULES["pole"]
    if _same(result.fastest_lap, prediction.fastest_lap):
        breakdown.fastest_lap = RULES["fastest_lap"]
    if _same(result.driver_of_the_day, prediction.driver_of_the_day):
        breakdown.driver_of_the_day = RULES["driver_of_the_day"]

    breakdown.race_podium = podium_points(prediction.race_podium, result.race_podium, RULES["race_podium"])

    # Sprint fields left over on a non-sprint weekend are ignored
    if gp.has_sprint:
        if _same(result.sprint_pole, prediction.sprint_pole):
            breakdown.sprint_pole = RULES["sprint_pole"]
        breakdown.sprint_podium = podium_points(
            prediction.sprint_podium, result.sprint_podium, RULES["sprint_podium"]
        )

    return GpScore(
        gp_id=result.gp_id,
        gp_name=gp.name,
        total_points=breakdown.total(),
        breakdown=breakdown,
    )


def exact_hits(prediction: Prediction, result: Result) -> ScoreDetail:
    """Raw exact-hit counters (0 or 1 each) for one GP, independent of points."""
    p1_hit = bool(
        result.race_podium and prediction.race_podium
        and _same(result.race_podium[0], prediction.race_podium[0])
    )
    return ScoreDetail(
        exact_pole=int(_same(result.pole, prediction.pole)),
        exact_p1=int(p1_hit),
        exact_fastest_lap=int(_same(result.fastest_lap, prediction.fastest_lap)),
    )


def count_exact_hits(gp: GrandPrix, prediction: Prediction, result: Result) -> int:
    """Every exact single-driver hit and exact podium slot of one GP."""
    pairs = [
        (result.pole, prediction.pole),
        (result.fastest_lap, prediction.fastest_lap),
        (result.driver_of_the_day, prediction.driver_of_the_day),
    ]
    podiums = [(result.race_podium, prediction.race_podium)]
    if gp.has_sprint:
        pairs.append((result.sprint_pole, prediction.sprint_pole))
        podiums.append((result.sprint_podium, prediction.sprint_podium))

    hits = sum(1 for actual, predicted in pairs if _same(actual, predicted))
    for actual, predicted in podiums:
        if actual and predicted:
            hits += sum(1 for a, p in zip(actual, predicted) if _same(a, p))
    return hits
