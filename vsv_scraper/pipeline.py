"""Scrape orchestration across all configured leagues."""
import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .aggregator import process_matches, sort_teams
from .browser import LivesportBrowser
from .config import HEADLESS, LEAGUES, ODDS_WORKERS, SCRAPE_TIMEOUT_SECONDS
from .models import League, ScrapeResult, TeamStat
from .scraper import LeagueScraper

logger = logging.getLogger(__name__)


def collect_team_stats(scraper: LeagueScraper, leagues: List[League]) -> List[TeamStat]:
    """
    Scrape and aggregate each league in turn.

    Returns:
        Team statistics in league order, unsorted
    """
    all_teams: List[TeamStat] = []

    for league in leagues:
        matches = scraper.scrape_league(league)
        teams = process_matches(matches, league)
        logger.info(f"{league.name}: {len(teams)} teams from {len(matches)} matches")
        all_teams.extend(teams)

    return all_teams


def run_scrape(
    leagues: Optional[List[League]] = None,
    headless: bool = HEADLESS,
    odds_workers: int = ODDS_WORKERS,
    timeout: float = SCRAPE_TIMEOUT_SECONDS,
    browser_factory: Optional[Callable[..., LivesportBrowser]] = None,
) -> ScrapeResult:
    """
    Run a full scrape and return teams sorted by VSV.

    Args:
        leagues: Leagues to scrape (all configured leagues if None)
        headless: Run browser in headless mode
        odds_workers: Number of odds pages fetched in parallel
        timeout: Overall time limit in seconds, 0 for none
        browser_factory: Callable creating a browser from ``headless``

    Raises:
        ScrapeTimeoutError: if the time limit is exceeded
        WebDriverException: if the browser cannot be started
    """
    if leagues is None:
        leagues = LEAGUES
    if browser_factory is None:
        browser_factory = LivesportBrowser

    deadline = time.monotonic() + timeout if timeout else None

    logger.info("Starting browser...")
    browser = browser_factory(headless=headless)
    try:
        browser.start()
        scraper = LeagueScraper(
            browser,
            odds_workers=odds_workers,
            browser_factory=lambda: browser_factory(headless=headless),
            deadline=deadline,
        )
        teams = collect_team_stats(scraper, leagues)
    finally:
        browser.close()

    return ScrapeResult(
        teams=sort_teams(teams),
        timestamp=datetime.now(timezone.utc),
    )
