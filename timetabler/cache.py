"""Single-slot pickle cache for the scraped timetable.

load() never raises on a missing or unreadable slot: it answers Absent and the
caller scrapes again. Only genuine I/O failures (permissions, a directory in
place of the file) propagate.
"""
import logging
import pickle
from dataclasses import dataclass
from pathlib import Path

from .errors import CacheWriteError
from .models import Timetable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Present:
    artifact: Timetable


@dataclass(frozen=True, slots=True)
class Absent:
    reason: str = "missing"


CacheResult = Present | Absent


def store(artifact: Timetable, path) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            pickle.dump(artifact, f, pickle.HIGHEST_PROTOCOL)
    except (OSError, pickle.PicklingError) as e:
        raise CacheWriteError(f"Could not write timetable cache {path}: {e}") from e
    logger.info("Timetable cached in %s (%d entries)", path, len(artifact))


def load(path) -> CacheResult:
    path = Path(path)
    try:
        f = open(path, 'rb')
    except FileNotFoundError:
        logger.info("No cached timetable at %s", path)
        return Absent("missing")

    with f:
        try:
            artifact = pickle.load(f)
        except OSError:
            raise
        except Exception as e:  # noqa: BLE001 - pickle raises arbitrary errors on garbage
            logger.warning("Cached timetable %s is corrupt, ignoring it: %s", path, e)
            return Absent("corrupt")

    if not isinstance(artifact, Timetable):
        logger.warning("Cached object in %s is %s, not a Timetable", path, type(artifact).__name__)
        return Absent("corrupt")
    logger.info("Loaded cached timetable from %s (%d entries)", path, len(artifact))
    return Present(artifact)
