"""Data models for the VSV scraper."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class League:
    """Represents a football league scraped from livesport."""
    id: str
    name: str
    results_url: str


@dataclass
class RawMatch:
    """Represents a finished match extracted from a results page."""
    home_team: str
    away_team: str
    score_home: int
    score_away: int
    match_id: str
    home_odds: Optional[float] = None
    away_odds: Optional[float] = None

    @property
    def has_odds(self) -> bool:
        return is_valid_odds(self.home_odds) and is_valid_odds(self.away_odds)


@dataclass
class OddsQuote:
    """Draw-no-bet decimal odds for both sides of a match."""
    home: Optional[float] = None
    away: Optional[float] = None


@dataclass
class TeamMatchView:
    """A match seen from one team's side."""
    team_odds: Optional[float]
    opponent_odds: Optional[float]
    team_won: bool
    is_draw: bool

    @property
    def is_favorite(self) -> bool:
        if not is_valid_odds(self.team_odds) or not is_valid_odds(self.opponent_odds):
            return False
        # Equal odds count as outsider
        return self.team_odds < self.opponent_odds


@dataclass
class VSVStats:
    """Stake/return totals for one team."""
    total_stakes: float = 0
    total_returns: float = 0
    vsv: float = 0
    favorite_count: int = 0
    outsider_count: int = 0


@dataclass
class TeamStat:
    """Aggregated VSV statistic for one team in one league."""
    name: str
    league: str
    league_id: str
    total_stakes: float
    total_returns: float
    vsv: float
    favorite_count: int
    outsider_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "league": self.league,
            "leagueId": self.league_id,
            "totalStakes": self.total_stakes,
            "totalReturns": self.total_returns,
            "vsv": self.vsv,
            "favoriteCount": self.favorite_count,
            "outsiderCount": self.outsider_count,
        }


@dataclass
class ScrapeResult:
    """Sorted team statistics from one scrape run."""
    teams: List[TeamStat] = field(default_factory=list)
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "teams": [team.to_dict() for team in self.teams],
            "timestamp": format_timestamp(self.timestamp),
        }


def is_valid_odds(value: Optional[float]) -> bool:
    """Odds count as present when they are a positive, finite number."""
    if value is None:
        return False
    # NaN fails every comparison
    return 0 < value < float("inf")


def format_timestamp(timestamp: Optional[datetime]) -> Optional[str]:
    """Render a UTC datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if timestamp is None:
        return None
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
