"""Headless Chrome wrapper used to render livesport pages."""
import logging
import queue
import time
from typing import Callable, List, Optional, TypeVar

from selenium import webdriver
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from webdriver_manager.chrome import ChromeDriverManager

from .config import CHROME_ARGS, HEADLESS, USER_AGENT

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LivesportBrowser:
    """Renders pages with Selenium and hands back their HTML."""

    def __init__(self, headless: bool = HEADLESS):
        self.headless = headless
        self._driver: Optional[webdriver.Chrome] = None

    def __enter__(self) -> "LivesportBrowser":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def start(self) -> webdriver.Chrome:
        """Get or create Selenium WebDriver."""
        if self._driver is None:
            options = Options()
            if self.headless:
                options.add_argument("--headless=new")
            for arg in CHROME_ARGS:
                options.add_argument(arg)
            options.add_argument("--window-size=1920,1080")
            options.add_argument(f"user-agent={USER_AGENT}")

            try:
                service = Service(ChromeDriverManager().install())
                self._driver = webdriver.Chrome(service=service, options=options)
            except Exception as e:
                logger.error(f"Failed to initialize Chrome WebDriver: {e}")
                raise
            logger.debug("Chrome WebDriver started")

        return self._driver

    def close(self):
        """Clean up WebDriver resources."""
        if self._driver:
            self._driver.quit()
            self._driver = None

    def render(self, url: str, timeout: float, settle_seconds: float = 0) -> str:
        """
        Load a page and return its rendered source.

        Args:
            url: Page to load
            timeout: Seconds allowed for navigation and the body to appear, together
            settle_seconds: Extra wait for client-side rendering

        Raises:
            TimeoutException: if the page does not load in time
            WebDriverException: on navigation errors
        """
        driver = self.start()
        driver.set_page_load_timeout(timeout)

        logger.debug(f"Loading {url}")
        started = time.monotonic()
        driver.get(url)

        remaining = max(0, timeout - (time.monotonic() - started))
        WebDriverWait(driver, remaining).until(
            EC.presence_of_element_located((By.TAG_NAME, "body"))
        )

        # Scores and odds are filled in by scripts after load
        if settle_seconds:
            time.sleep(settle_seconds)

        return driver.page_source


class BrowserPool:
    """Fixed set of browsers shared by worker threads."""

    def __init__(self, size: int, factory: Callable[[], LivesportBrowser]):
        self.size = size
        self._factory = factory
        self._browsers: List[LivesportBrowser] = []
        self._idle: "queue.Queue[LivesportBrowser]" = queue.Queue()

    def __enter__(self) -> "BrowserPool":
        for _ in range(self.size):
            browser = self._factory()
            self._browsers.append(browser)
            self._idle.put(browser)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def run(self, func: Callable[[LivesportBrowser], T]) -> T:
        """Borrow a browser for the duration of ``func``."""
        browser = self._idle.get()
        try:
            return func(browser)
        finally:
            self._idle.put(browser)

    def close(self):
        for browser in self._browsers:
            try:
                browser.close()
            except Exception as e:
                logger.warning(f"Error closing pooled browser: {e}")
        self._browsers = []
