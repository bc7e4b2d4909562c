from boxbox.schemas.league import GrandPrix, OfficialResult, Prediction, Tournament, User
from boxbox.services.achievements import evaluate_achievements

RESULT = OfficialResult(
    gp_id=1,
    pole="verstappen",
    race_podium=("verstappen", "norris", "leclerc"),
    fastest_lap="verstappen",
    driver_of_the_day="norris",
)

def ids(achievements):
    return [a.id for a in achievements]

def test_hat_trick_perfect_podium_and_nostradamus():
    perfect = Prediction(
        user_id="u1", gp_id=1, pole="verstappen",
        race_podium=("verstappen", "norris", "leclerc"), fastest_lap="verstappen",
    )
    other = Prediction(user_id="u2", gp_id=1, pole="verstappen")
    earned = evaluate_achievements("u1", [perfect, other], [RESULT])
    assert ids(earned) == ["driver_of_the_weekend", "hat_trick", "perfect_podium", "nostradamus"]
    assert all(a.gp_id == 1 for a in earned)

def test_nothing_for_empty_prediction():
    p = Prediction(user_id="u1", gp_id=1)
    assert evaluate_achievements("u1", [p], [RESULT]) == []

def test_top_score_shared_on_tie():
    a = Prediction(user_id="u1", gp_id=1, pole="verstappen")
    b = Prediction(user_id="u2", gp_id=1, pole="verstappen")
    assert "driver_of_the_weekend" in ids(evaluate_achievements("u2", [a, b], [RESULT]))

def test_veteran_and_league_creator():
    results = [OfficialResult(gp_id=i, pole="hamilton") for i in range(1, 11)]
    predictions = [Prediction(user_id="u1", gp_id=i) for i in range(1, 11)]
    tournaments = [Tournament(id="t1", name="Friends", creator_id="u1", member_ids=["u1"])]
    earned = ids(evaluate_achievements("u1", predictions, results, tournaments=tournaments))
    assert earned == ["veteran", "league_creator"]
    assert "veteran" not in ids(evaluate_achievements("u1", predictions[:9], results))

def test_sprint_hits_follow_schedule():
    result = OfficialResult(
        gp_id=2, pole="norris", sprint_pole="piastri",
        sprint_podium=("piastri", "norris", "russell"),
    )
    p = Prediction(
        user_id="u1", gp_id=2, pole="norris", sprint_pole="piastri",
        sprint_podium=("piastri", "norris", "russell"),
    )
    with_sprint = evaluate_achievements("u1", [p], [result])
    assert "nostradamus" in ids(with_sprint)
    schedule = [GrandPrix(id=2, name="Chinese Grand Prix", has_sprint=False)]
    without = evaluate_achievements("u1", [p], [result], schedule=schedule)
    assert "nostradamus" not in ids(without)

def test_top_score_ignores_unknown_users():
    mine = Prediction(user_id="u1", gp_id=1, pole="verstappen")
    ghost = Prediction(user_id="ghost", gp_id=1, pole="verstappen", fastest_lap="verstappen")
    assert "driver_of_the_weekend" not in ids(evaluate_achievements("u1", [mine, ghost], [RESULT]))
    users = [User(id="u1", username="alice")]
    earned = evaluate_achievements("u1", [mine, ghost], [RESULT], users=users)
    assert "driver_of_the_weekend" in ids(earned)
