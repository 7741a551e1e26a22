"""High-level orchestration: decide, fetch or reuse, display.

Usage patterns:

1. Regular run, scraping only when the cached timetable went stale:
   run_pipeline(producer=PlaywrightTimetableScraper(), display=HtmlDisplay("timetable.html"))

2. Ignore the freshness timestamp and scrape now:
   run_pipeline(..., force_refresh=True)
"""
import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Protocol, Sequence

from timetabler.config import settings
from timetabler.display import HtmlDisplay
from timetabler.emailer import send_timetable
from timetabler.freshness import FreshnessController, RunResult, TimetableProducer
from timetabler.logging_config import setup_logging
from timetabler.models import Timetable
from timetabler.scraping.playwright_scraper import PlaywrightTimetableScraper

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_DEGRADED = 2


class TimetableDisplay(Protocol):
    def render(self, timetable: Timetable) -> None: ...

    def close(self) -> None: ...


def run_pipeline(
        producer: TimetableProducer,
        display: TimetableDisplay,
        config_path: Path | str = settings.config_path,
        cache_path: Path | str = settings.cache_path,
        force_refresh: bool = False,
        clock: Callable[[], date] = date.today,
) -> RunResult:
    controller = FreshnessController(config_path, cache_path, producer, clock=clock)
    try:
        result = controller.run(force_refresh=force_refresh)
        display.render(result.timetable)
    except Exception:
        display.close()
        raise

    if result.degraded:
        logging.warning("Timetable shown from a fresh scrape but it will be scraped again next run")
    else:
        logging.info(f"Timetable shown from {result.source}")
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Timetable scraper with a freshness-gated cache")
    p.add_argument("--config", type=Path, default=settings.config_path, help="Path to config.properties")
    p.add_argument("--cache", type=Path, default=settings.cache_path, help="Path to the cached timetable file")
    p.add_argument("--output", type=Path, default=settings.output_html, help="Where to write the HTML timetable")
    p.add_argument("--force-refresh", action="store_true", help="Scrape even if the cached timetable is fresh")
    p.add_argument("--email", action="store_true", help="Send the timetable by email if credentials configured")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def main_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    display = HtmlDisplay(args.output)
    try:
        result = run_pipeline(
            producer=PlaywrightTimetableScraper(),
            display=display,
            config_path=args.config,
            cache_path=args.cache,
            force_refresh=args.force_refresh,
        )
    except Exception:  # noqa: BLE001
        logging.exception("Pipeline failed")
        return EXIT_FAILED

    if args.email and display.html:
        try:
            send_timetable(result, display.html)
        except Exception:  # noqa: BLE001
            logging.exception("Timetable rendered but mailing it failed")
    return EXIT_DEGRADED if result.degraded else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
