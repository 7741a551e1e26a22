"""HTML rendering of the timetable (the display side of a run)."""
import logging
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Timetable

logger = logging.getLogger(__name__)

WEEKDAYS_PL = ['poniedziałek', 'wtorek', 'środa', 'czwartek', 'piątek', 'sobota', 'niedziela']
TEMPLATES_DIR = Path(__file__).resolve().parents[1] / 'templates'


class HtmlDisplay:
    """Writes the timetable page to ``output_path``.

    The page is rendered into a ``.part`` file first and moved into place, so
    close() after a failure never leaves half a page behind.
    """

    template_name = 'timetable.html.j2'

    def __init__(self, output_path, templates_dir: Path = TEMPLATES_DIR):
        self.output_path = Path(output_path)
        self.env = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=select_autoescape(['html', 'xml']))
        self.html: str | None = None
        self.closed = False

    @property
    def _partial_path(self) -> Path:
        return self.output_path.with_name(self.output_path.name + '.part')

    def _format_days(self, timetable: Timetable) -> list[dict]:
        formatted = []
        for day, entries in timetable.days().items():
            formatted.append({
                'date': day.strftime("%Y-%m-%d"),
                'weekday': WEEKDAYS_PL[day.weekday()],
                'entries': [
                    {
                        'time': f"{e.start.strftime('%H:%M')} - {e.end.strftime('%H:%M')}",
                        'subject': e.subject,
                        'kind': e.kind,
                        'room': e.room,
                        'lecturer': e.lecturer,
                    }
                    for e in entries
                ],
            })
        return formatted

    def render(self, timetable: Timetable) -> None:
        if self.closed:
            raise RuntimeError("Display already closed")
        tpl = self.env.get_template(self.template_name)
        rendered = tpl.render(
            days=self._format_days(timetable),
            valid_until=timetable.valid_until.strftime("%Y-%m-%d") if timetable.valid_until else None,
        )
        self.html = BeautifulSoup(rendered, 'lxml').prettify()

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._partial_path.write_text(self.html, encoding='utf-8')
        self._partial_path.replace(self.output_path)
        logger.info(f"Timetable written to {self.output_path}")

    def close(self) -> None:
        if self.closed:
            return
        self._partial_path.unlink(missing_ok=True)
        self.closed = True
        logger.debug("Display closed")
