from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterator


@dataclass(frozen=True, slots=True)
class TimetableEntry:
    """Single class meeting scraped from the timetable grid.

    kind keeps the source's own label (lecture, lab, seminar...) untouched.
    """
    day: date
    start: time
    end: time
    subject: str
    room: str = ""
    lecturer: str = ""
    kind: str = ""


@dataclass(frozen=True, slots=True)
class Timetable:
    """The cached artifact: every entry in the scraped timeframe plus the
    date through which the source declared it valid."""
    entries: tuple[TimetableEntry, ...] = field(default_factory=tuple)
    valid_until: date | None = None

    def days(self) -> dict[date, list[TimetableEntry]]:
        grouped: dict[date, list[TimetableEntry]] = {}
        for entry in sorted(self.entries, key=lambda e: (e.day, e.start)):
            grouped.setdefault(entry.day, []).append(entry)
        return grouped

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class ScrapeResult:
    timetable: Timetable
    valid_until: date

    def __iter__(self) -> Iterator:
        # allows `timetable, valid_until = producer.fetch(...)`
        yield self.timetable
        yield self.valid_until
