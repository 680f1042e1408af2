"""Tests for the team and player stats pages."""

import pytest

from scrimhub_backend.core.exceptions import NotFound
from scrimhub_backend.services.match_results import save_match_results
from scrimhub_backend.services.stats import get_team_summary, get_player_summary

from conftest import make_player


def play_two_matches(session, seeded):
    first, second = seeded["match_ids"]
    a1, a2, a3 = seeded["alpha_players"]
    b1, b2 = seeded["bravo_players"]

    save_match_results(session, first, [
        {"team_id": seeded["alpha_id"], "placement": 1, "players": {a1: 3, a2: 2, a3: 1}},
        {"team_id": seeded["bravo_id"], "placement": 2, "players": {b1: 0, b2: 4}},
    ], map_name="Bermuda")
    save_match_results(session, second, [
        {"team_id": seeded["alpha_id"], "placement": 4, "players": {a1: 1, a2: 0, a3: 0}},
        {"team_id": seeded["bravo_id"], "placement": 1, "players": {b1: 2, b2: 2}},
    ], map_name="Purgatory")


class TestTeamSummary:

    def test_totals(self, session, seeded):
        play_two_matches(session, seeded)
        summary = get_team_summary(session, seeded["alpha_id"])

        assert summary["total_matches"] == 2
        assert summary["total_kills"] == 7
        assert summary["total_points"] == 18 + 8
        assert summary["booyahs"] == 1
        assert summary["avg_placement"] == 2.5

    def test_match_history(self, session, seeded):
        play_two_matches(session, seeded)
        matches = get_team_summary(session, seeded["bravo_id"])["matches"]

        assert [m["match_number"] for m in matches] == [1, 2]
        assert [m["map_name"] for m in matches] == ["Bermuda", "Purgatory"]
        assert matches[0]["scrim_name"] == "Evening Scrim"
        assert matches[1]["is_booyah"] is True

    def test_no_matches(self, session, seeded):
        summary = get_team_summary(session, seeded["alpha_id"])
        assert summary["total_matches"] == 0
        assert summary["avg_placement"] == 0.0
        assert summary["matches"] == []

    def test_missing_team(self, session):
        with pytest.raises(NotFound):
            get_team_summary(session, 31337)


class TestPlayerSummary:

    def test_totals(self, session, seeded):
        play_two_matches(session, seeded)
        summary = get_player_summary(session, seeded["alpha_players"][0])

        assert summary["matches_played"] == 2
        assert summary["total_kills"] == 4
        assert summary["kd"] == 2.0
        assert summary["booyahs"] == 1

    def test_player_without_matches(self, session):
        player = make_player(session, "benchwarmer")
        summary = get_player_summary(session, player.id)

        assert summary["matches_played"] == 0
        assert summary["kd"] == 0.0
        assert summary["booyahs"] == 0

    def test_missing_player(self, session):
        with pytest.raises(NotFound):
            get_player_summary(session, 31337)
