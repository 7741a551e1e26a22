"""Playwright producer: logs into the timetable site and collects ``timeframe`` days of classes."""

import logging
import math
from datetime import date, timedelta

from playwright.sync_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeoutError
from tqdm import tqdm

from ..config import settings
from ..errors import ScrapeError
from ..models import ScrapeResult, Timetable, TimetableEntry
from .base_driver import BasePlaywrightDriver, split_browser_args
from .parser import TimetablePageParser

logger = logging.getLogger(__name__)


class PlaywrightTimetableScraper(BasePlaywrightDriver):
    # Selectors
    _LOGIN_INPUT = "input[name='login']"
    _PASSWORD_INPUT = "input[name='password']"
    _SUBMIT_BUTTON = "button[type='submit']"
    _LOGIN_ERROR = ".login-error"
    _TIMETABLE_GRID = ".plan-week"
    _NEXT_WEEK_BUTTON = "button.plan-next-week"

    def __init__(self, url: str | None = None, locale: str | None = None, today: date | None = None):
        super().__init__()
        self.url = url or settings.timetable_url
        self.parser = TimetablePageParser(locale or settings.locale)
        self.today = today

    def _log_in(self, page: Page, login: str, password: str) -> None:
        logger.info(f"Logging in to {self.url} as {login}")
        page.goto(self.url, wait_until="domcontentloaded", timeout=60_000)
        page.locator(self._LOGIN_INPUT).fill(login)
        page.locator(self._PASSWORD_INPUT).fill(password)
        page.locator(self._SUBMIT_BUTTON).click()
        try:
            page.wait_for_selector(self._TIMETABLE_GRID, state="attached", timeout=20_000)
        except PlaywrightTimeoutError as e:
            if page.locator(self._LOGIN_ERROR).count():
                raise ScrapeError(f"Login rejected: {page.locator(self._LOGIN_ERROR).inner_text().strip()}") from e
            raise ScrapeError("Timetable did not load after logging in") from e

    def _collect_weeks(self, page: Page, weeks: int) -> list[str]:
        pages_html = []
        for week in tqdm(range(weeks), desc='Scraping weeks'):
            if week:
                page.locator(self._NEXT_WEEK_BUTTON).click()
                page.wait_for_load_state("networkidle")
            pages_html.append(page.content())
        return pages_html

    def run(self, browser, page, timeframe: int, login: str, password: str) -> ScrapeResult:
        self._log_in(page, login, password)
        weeks = max(1, math.ceil(timeframe / 7))
        pages_html = self._collect_weeks(page, weeks)
        return self.build_result(pages_html, timeframe)

    def build_result(self, pages_html: list[str], timeframe: int) -> ScrapeResult:
        """Merge weekly pages into a timetable limited to ``timeframe`` days from today."""
        today = self.today or date.today()
        last_day = today + timedelta(days=timeframe)
        entries: dict[TimetableEntry, None] = {}
        for html in pages_html:
            for entry in self.parser.parse_entries(html):
                if today <= entry.day < last_day:
                    entries[entry] = None
        valid_until = self.parser.parse_valid_until(pages_html[0])
        timetable = Timetable(tuple(sorted(entries, key=lambda e: (e.day, e.start))), valid_until)
        logger.info(f"Scraped {len(timetable)} entries, valid until {valid_until}")
        return ScrapeResult(timetable, valid_until)

    def fetch(self, timeframe: int, login: str, password: str, arg: str) -> ScrapeResult:
        self.headless, self.extra_args = split_browser_args(arg)
        try:
            return self.execute(timeframe, login, password)
        except PlaywrightError as e:
            raise ScrapeError(f"Browser failure while scraping timetable: {e}") from e
