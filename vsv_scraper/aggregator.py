"""VSV aggregation: simulated stakes and returns per team."""
from typing import Dict, Iterable, List

from .models import League, RawMatch, TeamMatchView, TeamStat, VSVStats, is_valid_odds

FAVORITE_STAKE = 100
OUTSIDER_STAKE = 50


def match_views(match: RawMatch) -> List[TeamMatchView]:
    """Return the home and away perspective of a match."""
    is_draw = match.score_home == match.score_away
    return [
        TeamMatchView(
            team_odds=match.home_odds,
            opponent_odds=match.away_odds,
            team_won=match.score_home > match.score_away,
            is_draw=is_draw,
        ),
        TeamMatchView(
            team_odds=match.away_odds,
            opponent_odds=match.home_odds,
            team_won=match.score_away > match.score_home,
            is_draw=is_draw,
        ),
    ]


def calculate_vsv(team_matches: Iterable[TeamMatchView]) -> VSVStats:
    """Simulate a fixed bet on the team in every decided match.

    The team is backed with 100 as favorite (lower odds than the opponent)
    and 50 as outsider. A win returns ``stake * team_odds``. Draws and matches
    without odds are skipped.

    Returns:
        VSVStats where ``vsv`` is the percentage profit on total stakes,
        0 when nothing was staked.
    """
    stats = VSVStats()

    for view in team_matches:
        if not is_valid_odds(view.team_odds) or not is_valid_odds(view.opponent_odds):
            continue
        if view.is_draw:
            continue

        if view.is_favorite:
            stake = FAVORITE_STAKE
            stats.favorite_count += 1
        else:
            stake = OUTSIDER_STAKE
            stats.outsider_count += 1

        stats.total_stakes += stake
        if view.team_won:
            stats.total_returns += stake * view.team_odds

    if stats.total_stakes > 0:
        stats.vsv = (stats.total_returns - stats.total_stakes) / stats.total_stakes * 100

    return stats


def process_matches(matches: Iterable[RawMatch], league: League) -> List[TeamStat]:
    """
    Turn a league's matches into one TeamStat per team.

    Matches without both odds are ignored. Teams come out in order of first
    appearance.
    """
    team_matches: Dict[str, List[TeamMatchView]] = {}

    for match in matches:
        if not match.has_odds:
            continue

        home_view, away_view = match_views(match)
        team_matches.setdefault(match.home_team, []).append(home_view)
        team_matches.setdefault(match.away_team, []).append(away_view)

    teams = []
    for team_name, views in team_matches.items():
        stats = calculate_vsv(views)
        teams.append(TeamStat(
            name=team_name,
            league=league.name,
            league_id=league.id,
            total_stakes=stats.total_stakes,
            total_returns=stats.total_returns,
            vsv=stats.vsv,
            favorite_count=stats.favorite_count,
            outsider_count=stats.outsider_count,
        ))

    return teams


def sort_teams(teams: Iterable[TeamStat]) -> List[TeamStat]:
    """Sort by VSV, best first; equal values keep their order."""
    return sorted(teams, key=lambda team: team.vsv, reverse=True)
