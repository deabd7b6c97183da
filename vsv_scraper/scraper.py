"""Per-league scraping: results page, then one odds page per match."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from selenium.common.exceptions import TimeoutException, WebDriverException

from .browser import BrowserPool, LivesportBrowser
from .config import (
    ODDS_PAGE_TIMEOUT,
    ODDS_SETTLE_SECONDS,
    RESULTS_PAGE_TIMEOUT,
    RESULTS_SETTLE_SECONDS,
    odds_url,
)
from .extractors import extract_matches, extract_odds
from .models import League, OddsQuote, RawMatch

logger = logging.getLogger(__name__)


class ScrapeTimeoutError(RuntimeError):
    """Raised when a scrape job runs past its deadline."""


class LeagueScraper:
    """Scrapes recent results and draw-no-bet odds for leagues on livesport."""

    def __init__(
        self,
        browser: LivesportBrowser,
        odds_workers: int = 1,
        browser_factory: Optional[Callable[[], LivesportBrowser]] = None,
        deadline: Optional[float] = None,
    ):
        """
        Args:
            browser: Browser used for results pages and sequential odds fetches
            odds_workers: Number of odds pages fetched in parallel
            browser_factory: Creates the extra browsers when odds_workers > 1
            deadline: ``time.monotonic()`` value after which the job is aborted
        """
        self.browser = browser
        self.odds_workers = max(1, odds_workers)
        self.browser_factory = browser_factory or LivesportBrowser
        self.deadline = deadline

    def check_deadline(self):
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise ScrapeTimeoutError("Scrape timed out")

    def page_timeout(self, timeout: float) -> float:
        """Limit a page timeout to the time left before the deadline."""
        self.check_deadline()
        if self.deadline is None:
            return timeout
        return min(timeout, self.deadline - time.monotonic())

    def scrape_league(self, league: League) -> List[RawMatch]:
        """
        Scrape recent matches of a league together with their odds.

        Returns:
            Matches in page order; empty if the results page could not be loaded
        """
        logger.info(f"Scraping {league.name}...")
        timeout = self.page_timeout(RESULTS_PAGE_TIMEOUT)

        try:
            html = self.browser.render(
                league.results_url, timeout, min(RESULTS_SETTLE_SECONDS, timeout)
            )
        except TimeoutException:
            self.check_deadline()
            logger.error(f"Timeout loading {league.results_url}")
            return []
        except WebDriverException as e:
            self.check_deadline()
            logger.error(f"Error scraping {league.name}: {e}")
            return []

        matches = extract_matches(html)
        logger.info(f"Found {len(matches)} matches for {league.name}")

        return self.attach_odds(matches)

    def fetch_match_odds(self, browser: LivesportBrowser, match: RawMatch) -> OddsQuote:
        """Load and parse the odds page of one match."""
        timeout = self.page_timeout(ODDS_PAGE_TIMEOUT)
        html = browser.render(odds_url(match.match_id), timeout, min(ODDS_SETTLE_SECONDS, timeout))
        return extract_odds(html)

    def _odds_or_empty(self, browser: LivesportBrowser, match: RawMatch) -> OddsQuote:
        self.check_deadline()
        try:
            return self.fetch_match_odds(browser, match)
        except Exception as e:
            # Past the deadline the whole job fails, not just this match
            self.check_deadline()
            logger.warning(f"Error getting odds for match {match.match_id}: {e}")
            return OddsQuote()

    def attach_odds(self, matches: List[RawMatch]) -> List[RawMatch]:
        """Fill in home/away odds on each match; failed fetches leave them empty."""
        if not matches:
            return matches

        if self.odds_workers == 1:
            quotes = [self._odds_or_empty(self.browser, match) for match in matches]
        else:
            workers = min(self.odds_workers, len(matches))
            with BrowserPool(workers, self.browser_factory) as pool, \
                    ThreadPoolExecutor(max_workers=workers) as executor:
                quotes = list(executor.map(
                    lambda match: pool.run(lambda browser: self._odds_or_empty(browser, match)),
                    matches,
                ))

        for match, quote in zip(matches, quotes):
            match.home_odds = quote.home
            match.away_odds = quote.away

        with_odds = sum(1 for match in matches if match.has_odds)
        logger.info(f"Odds found for {with_odds}/{len(matches)} matches")
        return matches
