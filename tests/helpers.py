from datetime import date, time
from pathlib import Path

from timetabler.models import ScrapeResult, Timetable, TimetableEntry

DEFAULT_CONFIG = {
    "date": "",
    "timeframe": "100",
    "login": "abcde12345",
    "password": "abcde12345",
    "arg": "--headless",
}


def write_config(path: Path, **overrides) -> Path:
    values = {**DEFAULT_CONFIG, **overrides}
    lines = [f"{key}={value}" for key, value in values.items() if value is not None]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def sample_timetable(valid_until: date = date(2024, 6, 30)) -> Timetable:
    return Timetable(
        entries=(
            TimetableEntry(date(2024, 4, 2), time(8, 15), time(9, 45), "Analiza matematyczna",
                           room="A-1 s.329", lecturer="dr Jan Kowalski", kind="Wykład"),
            TimetableEntry(date(2024, 4, 2), time(10, 0), time(11, 30), "Programowanie",
                           room="C-3 s.12", lecturer="mgr Anna Nowak", kind="Laboratorium"),
            TimetableEntry(date(2024, 4, 4), time(12, 15), time(13, 45), "Fizyka", kind="Ćwiczenia"),
        ),
        valid_until=valid_until,
    )


class FakeProducer:
    def __init__(self, result: ScrapeResult | None = None, error: Exception | None = None, on_fetch=None):
        self.result = result or ScrapeResult(sample_timetable(), date(2024, 6, 30))
        self.error = error
        self.on_fetch = on_fetch
        self.calls: list[tuple] = []

    def fetch(self, timeframe, login, password, arg):
        self.calls.append((timeframe, login, password, arg))
        if self.on_fetch:
            self.on_fetch()
        if self.error:
            raise self.error
        return self.result


class FakeDisplay:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.rendered: list[Timetable] = []
        self.closed = False

    def render(self, timetable):
        if self.error:
            raise self.error
        self.rendered.append(timetable)

    def close(self):
        self.closed = True
