from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boxbox.db.base import Base
from boxbox.db.session import get_db
from boxbox.main import app
from boxbox.models import league as m

engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool, future=True,
)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db
client = TestClient(app)

NOW = datetime.now(timezone.utc)

def setup_function():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestingSession() as db:
        db.add_all([
            m.User(id="u1", username="ana", email="ana@example.com"),
            m.User(id="u2", username="bruno", email="bruno@example.com"),
            m.Driver(id="verstappen", name="Max Verstappen", team_id="red_bull"),
            m.Driver(id="norris", name="Lando Norris", team_id="mclaren"),
            m.Driver(id="leclerc", name="Charles Leclerc", team_id="ferrari"),
            m.Driver(id="piastri", name="Oscar Piastri", team_id="mclaren"),
            m.Driver(id="ricciardo", name="Daniel Ricciardo", team_id="rb", is_active=False),
            # finished weekend
            m.GrandPrix(id=1, name="Australian Grand Prix", has_sprint=False,
                        quali_at=NOW - timedelta(days=8), race_at=NOW - timedelta(days=7)),
            # upcoming sprint weekend
            m.GrandPrix(id=2, name="Chinese Grand Prix", has_sprint=True,
                        quali_at=NOW + timedelta(days=3), race_at=NOW + timedelta(days=4),
                        sprint_quali_at=NOW + timedelta(days=2), sprint_at=NOW + timedelta(days=3, hours=-4)),
            m.Prediction(user_id="u1", gp_id=1, pole="verstappen",
                         race_podium=["verstappen", "norris", "leclerc"], fastest_lap="norris"),
            m.Prediction(user_id="u2", gp_id=1, pole="norris", race_podium=["norris", "verstappen", None]),
            m.Tournament(id="t1", name="Office", creator_id="u2", member_ids=["u2"], pending_member_ids=["u1"]),
        ])
        db.commit()

def publish_gp1():
    return client.post("/results/1/publish", json={
        "pole": "verstappen",
        "race_podium": ["verstappen", "norris", "piastri"],
        "fastest_lap": "norris",
        "driver_of_the_day": "leclerc",
        "manual_overrides": {"fastest_lap": {"editor_name": "admin", "reason": "steward decision"}},
    })

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_schedule_lock_flags():
    r = client.get("/schedule")
    assert r.status_code == 200
    body = {gp["id"]: gp for gp in r.json()}
    assert body[1]["is_race_locked"] is True
    assert body[1]["is_sprint_locked"] is True
    assert body[2]["is_race_locked"] is False
    assert body[2]["is_sprint_locked"] is False

def test_lock_status_at_instant():
    at = (NOW + timedelta(days=2, minutes=-4)).isoformat()
    r = client.get("/schedule/2/lock-status", params={"at": at})
    assert r.status_code == 200
    assert r.json() == {"is_race_locked": False, "is_sprint_locked": True}
    assert client.get("/schedule/42/lock-status").status_code == 404

def test_submit_prediction_and_update_partially():
    r = client.put("/predictions/2", json={"user_id": "u1", "pole": "norris", "sprint_pole": "piastri"})
    assert r.status_code == 200
    assert r.json()["pole"] == "norris"

    r = client.put("/predictions/2", json={"user_id": "u1", "race_podium": ["norris", "piastri", None]})
    assert r.status_code == 200
    body = r.json()
    assert body["pole"] == "norris"
    assert body["sprint_pole"] == "piastri"
    assert body["race_podium"] == ["norris", "piastri", None]

def test_submit_rejections():
    # form closed
    r = client.put("/predictions/1", json={"user_id": "u1", "pole": "norris"})
    assert r.status_code == 403
    # same driver twice on the podium
    r = client.put("/predictions/2", json={"user_id": "u1", "race_podium": ["norris", "norris", None]})
    assert r.status_code == 422
    # retired driver
    r = client.put("/predictions/2", json={"user_id": "u1", "pole": "ricciardo"})
    assert r.status_code == 422
    assert client.put("/predictions/2", json={"user_id": "nobody", "pole": "norris"}).status_code == 404

def test_publish_caches_scores():
    r = publish_gp1()
    assert r.status_code == 200
    body = r.json()
    assert body["published_sessions"] == ["quali", "race"]
    # u1: pole 10 + P1 15 + P2 10 + fastest 8 ; u2: P1 norris on podium 5 + P2 verstappen on podium 5
    assert {s["user_id"]: s["total_points"] for s in body["scores"]} == {"u1": 43, "u2": 10}

    result = client.get("/results/1").json()
    assert result["manual_overrides"]["fastest_lap"]["reason"] == "steward decision"
    assert client.get("/results/2").status_code == 404

def test_republish_keeps_earlier_sessions():
    r = client.post("/results/1/publish", json={"pole": "verstappen"})
    assert r.status_code == 200
    assert r.json()["published_sessions"] == ["quali"]
    assert {s["user_id"]: s["total_points"] for s in r.json()["scores"]} == {"u1": 10, "u2": 0}

    r = client.post("/results/1/publish", json={
        "race_podium": ["verstappen", "norris", "piastri"], "fastest_lap": "norris",
    })
    assert r.status_code == 200
    body = r.json()
    assert body["published_sessions"] == ["quali", "race"]
    assert {s["user_id"]: s["total_points"] for s in body["scores"]} == {"u1": 43, "u2": 10}
    assert client.get("/results/1").json()["pole"] == "verstappen"

def test_empty_driver_never_scores():
    r = client.put("/predictions/2", json={"user_id": "u1", "pole": "", "race_podium": ["", None, None]})
    assert r.status_code == 200
    r = client.post("/results/2/publish", json={"pole": "", "race_podium": ["", "norris", "leclerc"]})
    assert r.status_code == 200
    assert r.json()["published_sessions"] == ["race"]
    assert r.json()["scores"] == [{"user_id": "u1", "total_points": 0}]
    assert client.get("/predictions/2/u1/score").json()["total_points"] == 0

def test_prediction_score_endpoint():
    assert client.get("/predictions/1/u1/score").status_code == 404
    publish_gp1()
    r = client.get("/predictions/1/u1/score")
    assert r.status_code == 200
    body = r.json()
    assert body["gp_name"] == "Australian Grand Prix"
    assert body["total_points"] == 43
    assert body["breakdown"]["race_podium"] == 25

def test_gp_and_season_standings():
    assert client.get("/results/1/standings").json() == []
    publish_gp1()
    rows = client.get("/results/1/standings").json()
    assert [(row["user_id"], row["points"]) for row in rows] == [("u1", 43), ("u2", 10)]

    season = client.get("/standings/season").json()
    assert [(t["user_id"], t["total_points"]) for t in season] == [("u1", 43), ("u2", 10)]
    assert season[0]["details"] == {"exact_pole": 1, "exact_p1": 1, "exact_fastest_lap": 1}

def test_adjustments_and_tournament():
    publish_gp1()
    r = client.post("/standings/adjustments", json={
        "user_id": "u2", "points": 40, "reason": "missed lock due to outage", "admin_id": "admin",
    })
    assert r.status_code == 201
    season = client.get("/standings/season").json()
    assert [(t["user_id"], t["total_points"]) for t in season] == [("u2", 50), ("u1", 43)]
    assert season[0]["point_adjustments"][0]["reason"] == "missed lock due to outage"

    board = client.get("/standings/tournaments/t1").json()
    assert [t["user_id"] for t in board] == ["u2"]
    assert client.get("/standings/tournaments/nope").status_code == 404

def test_achievements_endpoint():
    publish_gp1()
    r = client.get("/standings/achievements/u1")
    assert r.status_code == 200
    assert [a["id"] for a in r.json()] == ["driver_of_the_weekend", "hat_trick"]
    assert [a["id"] for a in client.get("/standings/achievements/u2").json()] == ["league_creator"]
