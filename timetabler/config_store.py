"""Reading and updating the flat ``key=value`` timetable config file.

Example file::

    date=2024-04-02
    timeframe=100
    login=abcde12345
    password=abcde12345
    arg=--headless

The loaded Configuration is immutable; the only write path is
persist_timestamp, which rewrites the ``date`` line and leaves every other
line (unknown keys included) as it was.
"""
import datetime
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import dacite
from dotenv import dotenv_values, set_key

from .dates import parse_timestamp
from .errors import ConfigNotFound, InvalidFormat, MissingKey, TimestampWriteError

logger = logging.getLogger(__name__)

DATE_KEY = "date"


@dataclass(frozen=True, slots=True)
class Configuration:
    timeframe: int
    login: str
    password: str = field(repr=False)
    arg: str
    date: str = ""

    @property
    def timestamp(self) -> datetime.date | None:
        """Freshness timestamp, None when the timetable was never fetched."""
        return parse_timestamp(self.date)


_TIMEFRAME_RE = re.compile(r'^[0-9]+$')


def _parse_timeframe(value) -> int:
    text = str(value).strip()
    if not _TIMEFRAME_RE.match(text):
        raise InvalidFormat(f"timeframe must be a non-negative whole number, got '{value}'")
    return int(text)


_DACITE_CONFIG = dacite.Config(type_hooks={int: _parse_timeframe})


def _require_file(path) -> Path:
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFound(path)
    return path


def load_config(path) -> Configuration:
    path = _require_file(path)
    try:
        raw = dotenv_values(path, interpolate=False)
    except OSError as e:
        raise ConfigNotFound(path) from e
    except UnicodeDecodeError as e:
        raise InvalidFormat(f"Config file {path} is not valid UTF-8: {e}") from e

    # a bare key without '=' parses to None, treat it like a missing one
    data = {key: value for key, value in raw.items() if value is not None}

    try:
        config = dacite.from_dict(data_class=Configuration, data=data, config=_DACITE_CONFIG)
    except dacite.MissingValueError as e:
        raise MissingKey(e.field_path) from e
    logger.debug("Loaded config from %s (timeframe=%s, date=%r)", path, config.timeframe, config.date)
    return config


def persist_timestamp(date_string: str, path) -> None:
    """Replace the ``date`` entry of the config file, keeping the other keys."""
    path = _require_file(path)
    try:
        set_key(path, DATE_KEY, date_string, quote_mode="never")
    except (OSError, UnicodeDecodeError) as e:
        raise TimestampWriteError(f"Could not save timestamp to {path}: {e}") from e
    logger.info("Saved freshness timestamp %s to %s", date_string, path)
