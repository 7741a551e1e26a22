from datetime import date

import pytest

from timetabler.display import HtmlDisplay
from timetabler.models import Timetable
from tests.helpers import sample_timetable


def test_render_writes_html(tmp_path) -> None:
    output = tmp_path / "out" / "timetable.html"
    display = HtmlDisplay(output)

    display.render(sample_timetable(valid_until=date(2024, 6, 30)))

    html = output.read_text(encoding="utf-8")
    assert "Analiza matematyczna" in html
    assert "dr Jan Kowalski" in html
    assert "wtorek" in html
    assert "czwartek" in html
    assert "2024-06-30" in html
    assert display.html == html
    assert not (tmp_path / "out" / "timetable.html.part").exists()


def test_render_empty_timetable(tmp_path) -> None:
    display = HtmlDisplay(tmp_path / "timetable.html")
    display.render(Timetable())
    assert "Brak zajęć" in display.html


def test_close_removes_partial_page(tmp_path) -> None:
    output = tmp_path / "timetable.html"
    partial = tmp_path / "timetable.html.part"
    partial.write_text("<html>", encoding="utf-8")
    display = HtmlDisplay(output)

    display.close()
    display.close()

    assert not partial.exists()
    with pytest.raises(RuntimeError):
        display.render(sample_timetable())
