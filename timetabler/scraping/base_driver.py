import logging

from playwright.sync_api import sync_playwright
from playwright_stealth import Stealth

logger = logging.getLogger(__name__)


def split_browser_args(arg: str) -> tuple[bool, list[str]]:
    """Turn the free-form ``arg`` config value into (headless, extra chromium args)."""
    flags = arg.split()
    headless = '--headless' in flags
    return headless, [flag for flag in flags if flag != '--headless']


class BasePlaywrightDriver:
    """Chromium driver with anti-bot stealth applied."""

    url: str = "about:blank"
    timeout: int = 30 * 1000

    def __init__(self, headless: bool = True, extra_args: list[str] | None = None):
        self.headless = headless
        self.extra_args = extra_args or []

    def _get_browser_args(self) -> list[str]:
        return [
            "--disable-blink-features=AutomationControlled",
            "--no-sandbox",
            "--disable-infobars",
            "--window-size=1280,900",
            "--disable-dev-shm-usage",
            *self.extra_args,
        ]

    def get_page(self, playwright):
        """Create and return a (browser, page) tuple with stealth applied."""
        browser = playwright.chromium.launch(
            headless=self.headless,
            args=self._get_browser_args(),
        )

        context = browser.new_context(
            user_agent=(
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
                "AppleWebKit/537.36 (KHTML, like Gecko) "
                "Chrome/131.0.0.0 Safari/537.36"
            ),
            locale="pl-PL",
            timezone_id="Europe/Warsaw",
            viewport={"width": 1280, "height": 900},
            extra_http_headers={
                "Accept-Language": "pl-PL,pl;q=0.9,en-US;q=0.8,en;q=0.7",
            },
        )

        # Skip loading images to speed up scraping
        context.route(
            "**/*.{png,jpg,jpeg,webp,svg,gif}",
            lambda route: route.abort(),
        )

        page = context.new_page()
        Stealth().apply_stealth_sync(page)
        page.set_default_timeout(self.timeout)
        logger.debug("Browser page created with stealth applied (headless=%s).", self.headless)
        return browser, page

    def run(self, browser, page, *args, **kwargs):
        """Override in subclasses. Called inside a sync_playwright context."""
        raise NotImplementedError

    def execute(self, *args, **kwargs):
        """Entry point: opens playwright, calls run(), closes browser."""
        with sync_playwright() as p:
            browser, page = self.get_page(p)
            try:
                return self.run(browser, page, *args, **kwargs)
            finally:
                browser.close()
