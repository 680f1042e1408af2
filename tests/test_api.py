"""Tests for the FastAPI HTTP surface."""

import pytest


def admin_headers(client):
    client.post("/auth/register", json={"email": "admin@scrimhub.gg", "password": "hunter22"})
    response = client.post("/auth/login", json={"email": "admin@scrimhub.gg", "password": "hunter22"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def scrim_setup(client):
    """Two teams with one rostered player each, in a one-match scrim."""
    alpha = client.post("/teams", json={"name": "Team Alpha", "email": "alpha@example.com"}).json()
    bravo = client.post("/teams", json={"name": "Team Bravo", "email": "bravo@example.com"}).json()

    a1 = client.post("/players", json={
        "username": "alpha_1", "email": "a1@example.com", "join_code": alpha["join_code"],
    }).json()
    b1 = client.post("/players", json={
        "username": "bravo_1", "email": "b1@example.com", "join_code": bravo["join_code"],
    }).json()

    scrim = client.post("/scrims", json={"name": "API Scrim", "match_count": 1}).json()
    for team, player in ((alpha, a1), (bravo, b1)):
        assert client.post(f"/scrims/{scrim['id']}/teams", json={"team_id": team["id"]}).status_code == 201
        response = client.put(
            f"/scrims/{scrim['id']}/teams/{team['id']}/roster", json={"player_ids": [player["id"]]}
        )
        assert response.status_code == 200

    match = client.get(f"/scrims/{scrim['id']}/matches").json()[0]
    return {"alpha": alpha, "bravo": bravo, "a1": a1, "b1": b1, "scrim": scrim, "match": match}


def results_body(setup, alpha_kills=6, bravo_kills=4):
    return {
        "map_name": "Bermuda",
        "teams": [
            {"team_id": setup["alpha"]["id"], "placement": 1,
             "players": {str(setup["a1"]["id"]): alpha_kills}},
            {"team_id": setup["bravo"]["id"], "placement": 2,
             "players": {str(setup["b1"]["id"]): bravo_kills}},
        ],
    }


class TestHealthEndpoint:

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestAuth:

    def test_register_twice(self, client):
        body = {"email": "admin@scrimhub.gg", "password": "hunter22"}
        assert client.post("/auth/register", json=body).status_code == 200
        assert client.post("/auth/register", json=body).status_code == 400

    def test_wrong_password(self, client):
        client.post("/auth/register", json={"email": "admin@scrimhub.gg", "password": "hunter22"})
        response = client.post("/auth/login", json={"email": "admin@scrimhub.gg", "password": "nope-nope"})
        assert response.status_code == 401

    def test_submit_requires_token(self, client, scrim_setup):
        response = client.post(f"/matches/{scrim_setup['match']['id']}/results", json=results_body(scrim_setup))
        assert response.status_code == 401

    def test_submit_rejects_unknown_token(self, client, scrim_setup):
        response = client.post(
            f"/matches/{scrim_setup['match']['id']}/results",
            json=results_body(scrim_setup),
            headers={"Authorization": "Bearer not-a-real-token"},
        )
        assert response.status_code == 401


class TestMatchResults:

    def test_submit_and_read_back(self, client, scrim_setup):
        match_id = scrim_setup["match"]["id"]
        response = client.post(f"/matches/{match_id}/results", json=results_body(scrim_setup),
                               headers=admin_headers(client))
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        results = client.get(f"/matches/{match_id}/results").json()
        assert [r["total_points"] for r in results["results"]] == [18, 13]
        assert results["map_name"] == "Bermuda"

    def test_result_sheet(self, client, scrim_setup):
        sheet = client.get(f"/matches/{scrim_setup['match']['id']}/result-sheet").json()
        assert len(sheet["teams"]) == 2
        assert sheet["teams"][0]["players"][0]["username"] == "alpha_1"
        assert sheet["teams"][0]["placement"] == 0

    def test_unknown_match_is_404(self, client):
        response = client.post("/matches/999/results", json={"teams": [{"team_id": 1, "placement": 1}]},
                               headers=admin_headers(client))
        assert response.status_code == 404
        assert response.json() == {"detail": "Match not found.", "error": "NotFound"}

    def test_team_outside_scrim_is_400(self, client, scrim_setup):
        outsider = client.post("/teams", json={"name": "Outsiders", "email": "out@example.com"}).json()
        body = results_body(scrim_setup)
        body["teams"].append({"team_id": outsider["id"], "placement": 3, "players": {}})

        response = client.post(f"/matches/{scrim_setup['match']['id']}/results", json=body,
                               headers=admin_headers(client))
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidReference"

    def test_duplicate_team_is_422(self, client, scrim_setup):
        body = results_body(scrim_setup)
        body["teams"][1]["team_id"] = scrim_setup["alpha"]["id"]

        response = client.post(f"/matches/{scrim_setup['match']['id']}/results", json=body,
                               headers=admin_headers(client))
        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_non_integer_placement_uses_error_body(self, client, scrim_setup):
        body = results_body(scrim_setup)
        body["teams"][0]["placement"] = 1.5

        response = client.post(f"/matches/{scrim_setup['match']['id']}/results", json=body,
                               headers=admin_headers(client))
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert isinstance(data["detail"], str)
        assert "placement" in data["detail"]

    def test_negative_kills_uses_same_body(self, client, scrim_setup):
        response = client.post(f"/matches/{scrim_setup['match']['id']}/results",
                               json=results_body(scrim_setup, bravo_kills=-2),
                               headers=admin_headers(client))
        assert response.status_code == 422
        assert set(response.json()) == {"detail", "error"}
        assert response.json()["error"] == "ValidationError"


class TestLeaderboards:

    def test_rankings_after_submission(self, client, scrim_setup):
        client.post(f"/matches/{scrim_setup['match']['id']}/results", json=results_body(scrim_setup),
                    headers=admin_headers(client))

        teams = client.get("/leaderboards/teams").json()
        assert [t["team_name"] for t in teams] == ["Team Alpha", "Team Bravo"]
        assert teams[0]["rank"] == 1

        players = client.get("/leaderboards/players", params={"limit": 1}).json()
        assert len(players) == 1
        assert players[0]["username"] == "alpha_1"

    def test_empty_leaderboard(self, client):
        assert client.get("/leaderboards/teams").json() == []


class TestTeamsAndPlayers:

    def test_missing_team_is_404(self, client):
        response = client.get("/teams/12345")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_player_moves_to_free_agent(self, client, scrim_setup):
        player_id = scrim_setup["a1"]["id"]
        response = client.patch(f"/players/{player_id}/team", json={"team_id": None})
        assert response.status_code == 200
        assert response.json()["team_id"] is None

    def test_player_stats(self, client, scrim_setup):
        client.post(f"/matches/{scrim_setup['match']['id']}/results", json=results_body(scrim_setup),
                    headers=admin_headers(client))
        stats = client.get(f"/players/{scrim_setup['a1']['id']}/stats").json()
        assert stats["total_kills"] == 6
        assert stats["booyahs"] == 1

    def test_duplicate_scrim_team_is_422(self, client, scrim_setup):
        response = client.post(f"/scrims/{scrim_setup['scrim']['id']}/teams",
                               json={"team_id": scrim_setup["alpha"]["id"]})
        assert response.status_code == 422
