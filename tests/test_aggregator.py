from __future__ import annotations

import math

from vsv_scraper.aggregator import calculate_vsv, match_views, process_matches, sort_teams
from vsv_scraper.models import League, RawMatch, TeamMatchView, TeamStat

LEAGUE = League(id="premier-league", name="Premier League", results_url="https://example.test/pl")


def _match(home, away, score_home, score_away, home_odds=None, away_odds=None, match_id="m"):
    return RawMatch(
        home_team=home,
        away_team=away,
        score_home=score_home,
        score_away=score_away,
        match_id=match_id,
        home_odds=home_odds,
        away_odds=away_odds,
    )


def _by_name(teams):
    return {team.name: team for team in teams}


def test_favorite_beats_outsider() -> None:
    teams = _by_name(process_matches([_match("A", "B", 2, 0, 1.5, 2.5)], LEAGUE))

    team_a = teams["A"]
    assert team_a.total_stakes == 100
    assert team_a.total_returns == 150
    assert team_a.vsv == 50
    assert (team_a.favorite_count, team_a.outsider_count) == (1, 0)

    team_b = teams["B"]
    assert team_b.total_stakes == 50
    assert team_b.total_returns == 0
    assert team_b.vsv == -100
    assert (team_b.favorite_count, team_b.outsider_count) == (0, 1)


def test_team_stats_are_tagged_with_league() -> None:
    team = process_matches([_match("A", "B", 1, 0, 1.5, 2.5)], LEAGUE)[0]

    assert team.league == "Premier League"
    assert team.league_id == "premier-league"


def test_draw_is_excluded_from_stakes() -> None:
    teams = _by_name(process_matches([_match("A", "B", 1, 1, 2.0, 2.0)], LEAGUE))

    for name in ("A", "B"):
        assert teams[name].total_stakes == 0
        assert teams[name].total_returns == 0
        assert teams[name].vsv == 0
        assert teams[name].favorite_count == teams[name].outsider_count == 0


def test_match_with_missing_odds_is_skipped_for_both_teams() -> None:
    matches = [
        _match("A", "B", 3, 0, home_odds=1.8, away_odds=None),
        _match("C", "D", 0, 1, home_odds=float("nan"), away_odds=2.0),
    ]

    assert process_matches(matches, LEAGUE) == []


def test_empty_match_list() -> None:
    assert process_matches([], LEAGUE) == []


def test_equal_odds_count_as_outsider() -> None:
    teams = _by_name(process_matches([_match("A", "B", 1, 0, 2.0, 2.0)], LEAGUE))

    assert teams["A"].total_stakes == 50
    assert teams["A"].total_returns == 100
    assert teams["A"].outsider_count == 1
    assert teams["B"].outsider_count == 1


def test_stake_is_100_or_50_per_decided_match() -> None:
    odds_pairs = [(1.2, 4.5), (3.4, 1.3), (2.0, 2.0), (1.9, 1.95), (5.0, 1.1)]

    for home_odds, away_odds in odds_pairs:
        home_view, away_view = match_views(_match("A", "B", 1, 0, home_odds, away_odds))
        for view in (home_view, away_view):
            stats = calculate_vsv([view])
            expected = 100 if view.team_odds < view.opponent_odds else 50
            assert stats.total_stakes == expected
            assert stats.favorite_count + stats.outsider_count == 1


def test_all_draw_views_yield_zero() -> None:
    views = [
        TeamMatchView(team_odds=1.5, opponent_odds=2.5, team_won=False, is_draw=True),
        TeamMatchView(team_odds=3.0, opponent_odds=1.3, team_won=False, is_draw=True),
    ]

    stats = calculate_vsv(views)

    assert stats.total_stakes == 0
    assert stats.vsv == 0


def test_calculate_vsv_over_several_matches() -> None:
    views = [
        TeamMatchView(team_odds=1.5, opponent_odds=2.5, team_won=True, is_draw=False),
        TeamMatchView(team_odds=3.0, opponent_odds=1.25, team_won=True, is_draw=False),
        TeamMatchView(team_odds=1.5, opponent_odds=2.5, team_won=False, is_draw=False),
        TeamMatchView(team_odds=2.0, opponent_odds=2.0, team_won=False, is_draw=True),
        TeamMatchView(team_odds=None, opponent_odds=2.0, team_won=True, is_draw=False),
    ]

    stats = calculate_vsv(views)

    assert stats.total_stakes == 250
    assert stats.total_returns == 300
    assert math.isclose(stats.vsv, 20)
    assert (stats.favorite_count, stats.outsider_count) == (2, 1)


def test_teams_keep_order_of_first_appearance() -> None:
    matches = [
        _match("C", "A", 1, 0, 1.5, 2.5),
        _match("B", "C", 1, 0, 1.5, 2.5),
    ]

    assert [team.name for team in process_matches(matches, LEAGUE)] == ["C", "A", "B"]


def test_result_does_not_depend_on_match_order() -> None:
    matches = [
        _match("A", "B", 2, 0, 1.5, 2.5, "1"),
        _match("C", "A", 1, 3, 2.0, 3.0, "2"),
        _match("B", "C", 1, 1, 2.0, 2.0, "3"),
        _match("C", "B", 0, 1, 1.5, 2.5, "4"),
    ]

    def as_set(teams):
        return {
            (t.name, t.total_stakes, t.total_returns, t.vsv, t.favorite_count, t.outsider_count)
            for t in teams
        }

    assert as_set(process_matches(matches, LEAGUE)) == as_set(process_matches(matches[::-1], LEAGUE))


def test_team_names_are_not_normalized() -> None:
    matches = [
        _match("Man Utd", "B", 1, 0, 1.5, 2.5),
        _match("Manchester United", "B", 1, 0, 1.5, 2.5),
    ]

    assert [team.name for team in process_matches(matches, LEAGUE)] == ["Man Utd", "B", "Manchester United"]


def _stat(name, vsv, league_id="x"):
    return TeamStat(
        name=name,
        league=league_id,
        league_id=league_id,
        total_stakes=0,
        total_returns=0,
        vsv=vsv,
        favorite_count=0,
        outsider_count=0,
    )


def test_sort_teams_descending_and_stable() -> None:
    teams = [
        _stat("first-zero", 0, "a"),
        _stat("best", 80, "a"),
        _stat("second-zero", 0, "b"),
        _stat("worst", -100, "b"),
        _stat("third-zero", 0, "b"),
    ]

    ordered = [team.name for team in sort_teams(teams)]

    assert ordered == ["best", "first-zero", "second-zero", "third-zero", "worst"]


def test_view_without_odds_is_not_favorite() -> None:
    assert not TeamMatchView(team_odds=None, opponent_odds=2.0, team_won=True, is_draw=False).is_favorite
    assert not TeamMatchView(team_odds=1.5, opponent_odds=None, team_won=True, is_draw=False).is_favorite
    assert not TeamMatchView(
        team_odds=float("nan"), opponent_odds=2.0, team_won=True, is_draw=False
    ).is_favorite
    assert TeamMatchView(team_odds=1.5, opponent_odds=2.0, team_won=True, is_draw=False).is_favorite
