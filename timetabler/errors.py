"""Exception hierarchy shared by the config store, date parser, cache and scraper.

A cache miss is deliberately absent from this module: it is a normal outcome
returned by ``cache.load`` (see ``cache.Absent``), not an error.
"""


class TimetablerError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(TimetablerError):
    pass


class ConfigNotFound(ConfigError, FileNotFoundError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Config file '{path}' not found or not readable")


class MissingKey(ConfigError, KeyError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Required config key '{self.key}' is missing"


class InvalidFormat(ConfigError, ValueError):
    pass


class DateFormatError(TimetablerError, ValueError):
    def __init__(self, text: str, reason: str = "unrecognized date"):
        self.text = text
        super().__init__(f"Cannot parse date '{text}': {reason}")


class ProducerFailure(TimetablerError):
    """Raised by timetable producers when a fetch cannot complete."""


class ScrapeError(ProducerFailure):
    pass


class PersistenceFailure(TimetablerError, OSError):
    pass


class CacheWriteError(PersistenceFailure):
    pass


class TimestampWriteError(PersistenceFailure):
    pass
