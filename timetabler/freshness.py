"""Decide whether the cached timetable can be reused or has to be scraped again.

The stored ``date`` in the config file is the day through which the cached
timetable is valid. A run walks START -> DECIDE -> (REUSE ->) [REFRESH ->] DONE
and always ends with exactly one timetable, or with the producer's error.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Protocol

from . import cache
from .config_store import Configuration, load_config, persist_timestamp
from .errors import CacheWriteError, ConfigNotFound, PersistenceFailure
from .models import ScrapeResult, Timetable

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    REUSE_CACHE = "reuse_cache"
    REFRESH = "refresh"


class State(str, Enum):
    START = "start"
    DECIDE = "decide"
    REUSE = "reuse"
    REFRESH = "refresh"
    DONE = "done"


class RunStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"


class TimetableProducer(Protocol):
    def fetch(self, timeframe: int, login: str, password: str, arg: str) -> ScrapeResult: ...


@dataclass(slots=True)
class RunResult:
    timetable: Timetable
    source: str
    decision: Decision
    status: RunStatus = RunStatus.OK
    persistence_errors: list[OSError] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.status is RunStatus.DEGRADED


def decide(timestamp: date | None, today: date) -> Decision:
    """Stored date today or later is fresh; absent or past forces a refresh."""
    if timestamp is None or timestamp < today:
        return Decision.REFRESH
    return Decision.REUSE_CACHE


class FreshnessController:
    def __init__(self, config_path, cache_path, producer: TimetableProducer,
                 clock: Callable[[], date] = date.today):
        self.config_path = Path(config_path)
        self.cache_path = Path(cache_path)
        self.producer = producer
        self.clock = clock
        self.state = State.START

    def _enter(self, state: State) -> None:
        logger.debug("%s -> %s", self.state.name, state.name)
        self.state = state

    def run(self, force_refresh: bool = False) -> RunResult:
        self.state = State.START
        config = load_config(self.config_path)

        self._enter(State.DECIDE)
        today = self.clock()
        decision = Decision.REFRESH if force_refresh else decide(config.timestamp, today)
        logger.info("Freshness timestamp %s, today %s -> %s", config.date or "<never>", today, decision.name)

        if decision is Decision.REUSE_CACHE:
            self._enter(State.REUSE)
            cached = cache.load(self.cache_path)
            if isinstance(cached, cache.Present):
                self._enter(State.DONE)
                return RunResult(cached.artifact, source="cache", decision=decision)
            logger.info("Config says fresh but cache is %s, scraping anyway", cached.reason)

        self._enter(State.REFRESH)
        result = self._refresh(config, decision)
        self._enter(State.DONE)
        return result

    def _refresh(self, config: Configuration, decision: Decision) -> RunResult:
        logger.info("Fetching timetable for %s days", config.timeframe)
        timetable, valid_until = self.producer.fetch(config.timeframe, config.login, config.password, config.arg)
        result = RunResult(timetable, source="scrape", decision=decision)

        try:
            cache.store(timetable, self.cache_path)
            persist_timestamp(valid_until.isoformat(), self.config_path)
        except (PersistenceFailure, ConfigNotFound) as e:
            if isinstance(e, CacheWriteError):
                logger.warning("Timestamp left unchanged since the cache was not written")
            logger.warning("Timetable not durably cached: %s", e)
            result.status = RunStatus.DEGRADED
            result.persistence_errors.append(e)
        return result
