from questionnaire_api.schemas import MaturityLevel
from questionnaire_api.services.leaderboard_service import maturity_level, parse_score


def test_maturity_levels():
    assert maturity_level(95) == MaturityLevel.ELITE
    assert maturity_level(90) == MaturityLevel.ELITE
    assert maturity_level(80) == MaturityLevel.ADVANCED
    assert maturity_level(50) == MaturityLevel.DEFINED
    assert maturity_level(35) == MaturityLevel.DEVELOPING
    assert maturity_level(34.9) == MaturityLevel.INITIATION


def test_parse_score():
    assert parse_score("82") == 82.0
    assert parse_score(" 82.5 ") == 82.5
    assert parse_score("n/a") is None
    assert parse_score("nan") is None
    assert parse_score(None) is None


def test_top_teams_ranking(client):
    rows = [
        ("alpha", "40"),
        ("bravo", "95"),
        ("charlie", "not scored"),
        ("delta", "82.5"),
        (None, "99"),
    ]
    for team, score in rows:
        response = client.post(
            "/api/submit-questionnaire",
            json={"answers": {"q1": 5}, "team": team, "score": score},
        )
        assert response.status_code == 200

    response = client.get("/api/top-teams")
    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [entry["team"] for entry in entries] == ["bravo", "delta", "alpha"]
    assert [entry["rank"] for entry in entries] == [1, 2, 3]
    assert [entry["level"] for entry in entries] == ["elite", "advanced", "developing"]

    limited = client.get("/api/top-teams", params={"limit": 1}).json()["entries"]
    assert [entry["team"] for entry in limited] == ["bravo"]


def test_top_teams_limit_bounds(client):
    assert client.get("/api/top-teams", params={"limit": 0}).status_code == 400
    assert client.get("/api/top-teams", params={"limit": 101}).status_code == 400
