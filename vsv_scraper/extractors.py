"""HTML parsers for livesport results and odds pages."""
import logging
import math
from itertools import islice
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from .config import MATCH_ID_PREFIX, ROUND_LIMIT
from .models import OddsQuote, RawMatch

logger = logging.getLogger(__name__)

SECTION_MARKER_SELECTOR = ".sportName.soccer"
SECTION_BOUNDARY_CLASS = "sportName"
MATCH_CLASS = "event__match"

HOME_ODDS_LABEL = "1"
AWAY_ODDS_LABEL = "2"


def _has_class(element: Tag, class_name: str) -> bool:
    return class_name in (element.get("class") or [])


def _text(element: Tag, selector: str) -> str:
    found = element.select_one(selector)
    # Inner whitespace belongs to the name, e.g. "Real <span>Madrid</span>"
    return found.get_text().strip() if found else ""


def parse_score(score_str: str) -> Optional[int]:
    """
    Parse a score cell.

    Returns:
        The score, or None unless the text is a non-negative integer
    """
    if not score_str:
        return None
    score_str = score_str.strip()
    if not score_str.isdecimal():
        return None
    return int(score_str)


def parse_decimal_odds(odds_str: str) -> Optional[float]:
    """
    Parse decimal odds such as '1.85'.

    Returns:
        Decimal odds or None if parsing fails or the value is not a positive number
    """
    if not odds_str:
        return None
    try:
        value = float(odds_str.strip())
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    return value


def strip_match_id(raw_id: Optional[str]) -> str:
    """Turn an element id like 'g_1_AbCd1234' into the match id 'AbCd1234'."""
    if not raw_id:
        return ""
    raw_id = raw_id.strip()
    if raw_id.startswith(MATCH_ID_PREFIX):
        raw_id = raw_id[len(MATCH_ID_PREFIX):]
    return raw_id


def iter_sections(soup: BeautifulSoup) -> Iterator[List[Tag]]:
    """
    Group the results page into sections.

    Each section marker opens a section that holds its following sibling
    elements up to the next ``sportName`` element or the end of the parent.

    Yields:
        List of sibling elements per section marker, in document order
    """
    for marker in soup.select(SECTION_MARKER_SELECTOR):
        section = []
        for sibling in marker.find_next_siblings():
            if _has_class(sibling, SECTION_BOUNDARY_CLASS):
                break
            section.append(sibling)
        yield section


def parse_match_element(element: Tag) -> Optional[RawMatch]:
    """
    Parse a single ``event__match`` row.

    Returns:
        RawMatch without odds, or None if any field is missing or a score is not numeric
    """
    home_team = _text(element, ".event__participant--home")
    away_team = _text(element, ".event__participant--away")
    score_home = parse_score(_text(element, ".event__score--home"))
    score_away = parse_score(_text(element, ".event__score--away"))
    match_id = strip_match_id(element.get("id"))

    if not home_team or not away_team or not match_id:
        return None
    if score_home is None or score_away is None:
        logger.debug(f"Skipping {home_team} vs {away_team}: score not available")
        return None

    return RawMatch(
        home_team=home_team,
        away_team=away_team,
        score_home=score_home,
        score_away=score_away,
        match_id=match_id,
    )


def extract_matches(html: str, round_limit: int = ROUND_LIMIT) -> List[RawMatch]:
    """
    Extract finished matches from a rendered results page.

    Args:
        html: Page source of a league results page
        round_limit: Number of sections (rounds) to read from the top of the page

    Returns:
        List of matches in page order, without odds
    """
    soup = BeautifulSoup(html, "lxml")
    matches = []

    for section in islice(iter_sections(soup), round_limit):
        for element in section:
            if not _has_class(element, MATCH_CLASS):
                continue
            match = parse_match_element(element)
            if match:
                matches.append(match)

    return matches


def extract_odds(html: str) -> OddsQuote:
    """
    Extract draw-no-bet odds from a rendered odds page.

    The first row labelled '1' gives the home odds and the first row labelled
    '2' gives the away odds. Rows with fewer than three cells are ignored.
    """
    soup = BeautifulSoup(html, "lxml")
    quote = OddsQuote()

    for row in soup.select(".ui-table__row"):
        cells = row.select(".ui-table__cell")
        if len(cells) < 3:
            continue

        label = cells[0].get_text().strip()
        if label == HOME_ODDS_LABEL and quote.home is None:
            quote.home = parse_decimal_odds(cells[1].get_text().strip())
        elif label == AWAY_ODDS_LABEL and quote.away is None:
            quote.away = parse_decimal_odds(cells[1].get_text().strip())

        if quote.home is not None and quote.away is not None:
            break

    return quote
