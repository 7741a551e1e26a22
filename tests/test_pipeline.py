from datetime import date

import pytest

from timetabler import cache, pipeline
from timetabler.errors import MissingKey, ScrapeError
from timetabler.pipeline import EXIT_DEGRADED, EXIT_FAILED, EXIT_OK, main_cli, run_pipeline
from tests.helpers import FakeDisplay, FakeProducer, sample_timetable, write_config

TODAY = date(2024, 4, 2)


def test_run_pipeline_renders_scraped_timetable(tmp_path) -> None:
    config_path = write_config(tmp_path / "config.properties")
    display = FakeDisplay()

    result = run_pipeline(FakeProducer(), display, config_path, tmp_path / "timetable.bin", clock=lambda: TODAY)

    assert display.rendered == [sample_timetable()]
    assert not display.closed
    assert result.source == "scrape"


def test_run_pipeline_closes_display_on_producer_failure(tmp_path) -> None:
    config_path = write_config(tmp_path / "config.properties")
    display = FakeDisplay()
    error = ScrapeError("login rejected")

    with pytest.raises(ScrapeError) as exc_info:
        run_pipeline(FakeProducer(error=error), display, config_path, tmp_path / "timetable.bin", clock=lambda: TODAY)

    assert exc_info.value is error
    assert display.closed
    assert display.rendered == []


def test_run_pipeline_closes_display_on_invalid_config(tmp_path) -> None:
    config_path = write_config(tmp_path / "config.properties", timeframe=None)
    display = FakeDisplay()
    producer = FakeProducer()

    with pytest.raises(MissingKey):
        run_pipeline(producer, display, config_path, tmp_path / "timetable.bin", clock=lambda: TODAY)

    assert display.closed
    assert display.rendered == []
    assert producer.calls == []


def test_run_pipeline_closes_display_on_render_failure(tmp_path) -> None:
    config_path = write_config(tmp_path / "config.properties")
    display = FakeDisplay(error=RuntimeError("window gone"))

    with pytest.raises(RuntimeError):
        run_pipeline(FakeProducer(), display, config_path, tmp_path / "timetable.bin", clock=lambda: TODAY)

    assert display.closed


def test_degraded_run_still_renders(tmp_path) -> None:
    config_path = write_config(tmp_path / "config.properties")
    (tmp_path / "timetable.bin").mkdir()
    display = FakeDisplay()

    result = run_pipeline(FakeProducer(), display, config_path, tmp_path / "timetable.bin", clock=lambda: TODAY)

    assert result.degraded
    assert display.rendered == [sample_timetable()]
    assert not display.closed


@pytest.fixture
def fake_scraper(monkeypatch):
    producer = FakeProducer()
    monkeypatch.setattr(pipeline, "PlaywrightTimetableScraper", lambda: producer)
    return producer


def _cli_args(tmp_path, *extra):
    return [
        "--config", str(tmp_path / "config.properties"),
        "--cache", str(tmp_path / "timetable.bin"),
        "--output", str(tmp_path / "timetable.html"),
        *extra,
    ]


def test_main_cli_reuses_fresh_cache(tmp_path, fake_scraper) -> None:
    write_config(tmp_path / "config.properties", date="2099-12-31")
    cache.store(sample_timetable(), tmp_path / "timetable.bin")

    assert main_cli(_cli_args(tmp_path)) == EXIT_OK

    assert fake_scraper.calls == []
    assert "Analiza matematyczna" in (tmp_path / "timetable.html").read_text(encoding="utf-8")


def test_main_cli_force_refresh(tmp_path, fake_scraper) -> None:
    write_config(tmp_path / "config.properties", date="2099-12-31")
    cache.store(sample_timetable(), tmp_path / "timetable.bin")

    assert main_cli(_cli_args(tmp_path, "--force-refresh")) == EXIT_OK
    assert len(fake_scraper.calls) == 1


def test_main_cli_degraded_exit_code(tmp_path, fake_scraper) -> None:
    write_config(tmp_path / "config.properties")
    (tmp_path / "timetable.bin").mkdir()

    assert main_cli(_cli_args(tmp_path)) == EXIT_DEGRADED
    assert (tmp_path / "timetable.html").exists()


def test_main_cli_failure_exit_code(tmp_path, fake_scraper) -> None:
    assert main_cli(_cli_args(tmp_path)) == EXIT_FAILED
    assert not (tmp_path / "timetable.html").exists()


def test_main_cli_mail_failure_keeps_exit_code(tmp_path, fake_scraper, monkeypatch) -> None:
    write_config(tmp_path / "config.properties")
    sent = []

    def failing_send(result, html):
        sent.append(result)
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(pipeline, "send_timetable", failing_send)

    assert main_cli(_cli_args(tmp_path, "--email")) == EXIT_OK
    assert len(sent) == 1
    assert (tmp_path / "timetable.html").exists()
