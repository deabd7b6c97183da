"""Configuration and settings for the VSV scraper."""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .models import League

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Browser
HEADLESS = _env_bool("HEADLESS", True)
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
CHROME_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

# Page timeouts and settle delays (seconds)
RESULTS_PAGE_TIMEOUT = 60
RESULTS_SETTLE_SECONDS = 3
ODDS_PAGE_TIMEOUT = 30
ODDS_SETTLE_SECONDS = 2

# Number of browsers fetching odds pages in parallel (1 = sequential)
ODDS_WORKERS = max(1, int(os.getenv("ODDS_WORKERS", "1")))

# Overall deadline for one scrape job, 0 disables it
SCRAPE_TIMEOUT_SECONDS = float(os.getenv("SCRAPE_TIMEOUT_SECONDS", "0"))

# Results page structure
ROUND_LIMIT = 5
MATCH_ID_PREFIX = "g_1_"

LIVESPORT_BASE_URL = "https://www.livesport.cz"
ODDS_PATH_TEMPLATE = "/zapas/{match_id}/kurzy/draw-no-bet/zakladni-doba/"

# Supported competitions, in pipeline order
LEAGUES = [
    League(
        id="premier-league",
        name="Premier League",
        results_url=f"{LIVESPORT_BASE_URL}/fotbal/anglie/premier-league/vysledky/",
    ),
    League(
        id="ligue-1",
        name="Ligue 1",
        results_url=f"{LIVESPORT_BASE_URL}/fotbal/francie/ligue-1/vysledky/",
    ),
    League(
        id="serie-a",
        name="Serie A",
        results_url=f"{LIVESPORT_BASE_URL}/fotbal/italie/serie-a/vysledky/",
    ),
    League(
        id="bundesliga",
        name="Bundesliga",
        results_url=f"{LIVESPORT_BASE_URL}/fotbal/nemecko/bundesliga/vysledky/",
    ),
    League(
        id="laliga",
        name="La Liga",
        results_url=f"{LIVESPORT_BASE_URL}/fotbal/spanelsko/laliga/vysledky/",
    ),
]


def odds_url(match_id: str) -> str:
    """Build the draw-no-bet odds page URL for a match."""
    return LIVESPORT_BASE_URL + ODDS_PATH_TEMPLATE.format(match_id=match_id)


def get_league(league_id: str) -> League:
    """Look up a configured league by its id."""
    for league in LEAGUES:
        if league.id == league_id:
            return league
    raise KeyError(f"Unknown league: {league_id}")


def setup_logging(console: Optional[Console] = None, level: str = LOG_LEVEL) -> None:
    """Send log records to a RichHandler on the root logger (once)."""
    root = logging.getLogger()
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        handler = RichHandler(console=console, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(level)
