"""Tests for the standings and stat-table extractors."""

from __future__ import annotations

from conftest import GOALIES_TABLE, PLAYERS_TABLE, STANDINGS_TABLE, scoreboard_form, table

from scaha_scraper.extractors import extract_goalie_stats, extract_player_stats, extract_standings
from scaha_scraper.models import TeamStats

STANDINGS_HEADERS = ["Team", "GP", "W", "L", "T", "Points", "GF", "GA", "GD"]


class TestExtractStandings:
    """Tests for extract_standings function."""

    def test_rows_map_positionally(self):
        teams = extract_standings(scoreboard_form(schedule="101", body=STANDINGS_TABLE))
        assert teams[0] == TeamStats(team="Jr. Kings (1)", gp=10, w=8, l=1, t=1, points=17, gf=45, ga=20, gd=25)
        assert teams[1].gd == -1
        assert len(teams) == 2

    def test_non_numeric_cells_default_to_zero(self):
        html = table("t", STANDINGS_HEADERS, [["Heat", "10", "-", "", "x", "7", "n/a", "3", "1"]])
        team = extract_standings(html)[0]
        assert (team.w, team.l, team.t, team.gf) == (0, 0, 0, 0)
        assert team.points == 7

    def test_label_and_short_rows_skipped(self):
        rows = [
            ["Team", "GP", "W", "L", "T", "Pts", "GF", "GA", "GD"],
            ["Select a division", "", "", "", "", "", "", "", ""],
            ["Short", "1", "2"],
            ["", "1", "1", "0", "0", "2", "3", "1", "2"],
            ["Heat", "1", "1", "0", "0", "2", "3", "1", "2"],
        ]
        teams = extract_standings(table("t", STANDINGS_HEADERS, rows))
        assert [t.team for t in teams] == ["Heat"]

    def test_team_names_containing_select_are_kept(self):
        rows = [
            ["Select a division", "", "", "", "", "", "", "", ""],
            ["OC Selects", "10", "6", "3", "1", "13", "40", "25", "15"],
            ["Lady select Hockey", "9", "2", "7", "0", "4", "12", "30", "-18"],
        ]
        teams = extract_standings(table("t", STANDINGS_HEADERS, rows))
        assert [t.team for t in teams] == ["OC Selects", "Lady select Hockey"]
        assert teams[1].gd == -18

    def test_leading_rank_column(self):
        headers = ["#"] + STANDINGS_HEADERS
        rows = [
            ["1", "Jr. Kings (1)", "10", "8", "1", "1", "17", "45", "20", "25"],
            ["2", "Heat", "10", "5", "5", "0", "10", "30", "31", "-1"],
        ]
        teams = extract_standings(table("t", headers, rows))
        assert [t.team for t in teams] == ["Jr. Kings (1)", "Heat"]
        assert teams[0].points == 17
        assert teams[1].gd == -1

    def test_falls_back_to_every_table(self):
        html = "<table><tr><td>Heat</td>" + "<td>1</td>" * 8 + "</tr></table>"
        assert extract_standings(html)[0].gd == 1

    def test_no_rows(self):
        assert extract_standings("<div>nothing</div>") == []


class TestExtractPlayerStats:
    """Tests for extract_player_stats function."""

    def test_all_rows(self):
        players = extract_player_stats(PLAYERS_TABLE, "j_id_4d:playertotals")
        assert [p.number for p in players] == ["7", "07", "12"]
        assert players[0].pts == 12
        assert players[1].team == "Jr. Kings (1)"

    def test_team_filter_uses_normalized_names(self):
        players = extract_player_stats(PLAYERS_TABLE, team="jr kings 1")
        assert [p.name for p in players] == ["Alex Smith", "Jordan Lee"]

    def test_header_row_inside_body_skipped(self):
        html = table(
            "frm:playertotals",
            ["#"],
            [["#", "Name", "Team", "GP", "G", "A", "Pts", "PIMS"], ["9", "Kim", "Heat", "1", "1", "1", "2", "0"]],
        )
        assert [p.name for p in extract_player_stats(html)] == ["Kim"]

    def test_table_found_by_marker_when_id_differs(self):
        html = PLAYERS_TABLE.replace("j_id_4d:playertotals", "j_id_9z:playertotals")
        assert len(extract_player_stats(html, "j_id_4d:playertotals")) == 3

    def test_missing_table_is_empty(self):
        assert extract_player_stats("<div>No stats</div>") == []


class TestExtractGoalieStats:
    """Tests for extract_goalie_stats function."""

    def test_rates_parsed(self):
        goalie = extract_goalie_stats(GOALIES_TABLE, "j_id_4d:goalietotals")[0]
        assert goalie.mins == 500
        assert goalie.saves == 230
        assert goalie.sv_pct == 0.92
        assert goalie.gaa == 2.0

    def test_non_numeric_rates_are_none(self):
        goalie = extract_goalie_stats(GOALIES_TABLE, team="Heat")[0]
        assert goalie.name == "Pat Net"
        assert goalie.sv_pct is None
        assert goalie.gaa is None

    def test_eight_cell_rows_skipped(self):
        html = table("frm:goalietotals", ["#"], [["30", "Kim", "Heat", "1", "60", "20", "18", ".900"]])
        assert extract_goalie_stats(html) == []
