"""BeautifulSoup parsing of the rendered timetable page.

Expected markup (one week per page)::

    <span class="plan-valid-until">Plan ważny do: 30 czerwca 2024</span>
    <div class="plan-day">
      <h3 class="plan-day__title">wtorek, 2 kwietnia 2024</h3>
      <div class="plan-item">
        <span class="plan-item__time">08:15 - 09:45</span>
        <span class="plan-item__subject">Analiza matematyczna</span>
        <span class="plan-item__kind">Wykład</span>
        <span class="plan-item__room">A-1 s.329</span>
        <span class="plan-item__lecturer">dr Jan Kowalski</span>
      </div>
    </div>
"""
import logging
import re
from datetime import date, datetime, time

from bs4 import BeautifulSoup

from ..dates import parse_localized
from ..errors import ScrapeError
from ..models import TimetableEntry

logger = logging.getLogger(__name__)


class TimetablePageParser:
    day_class = 'plan-day'
    day_title_class = 'plan-day__title'
    item_class = 'plan-item'
    valid_until_class = 'plan-valid-until'

    _time_range_regex = re.compile(r'(\d{1,2}:\d{2})\s*[-–]\s*(\d{1,2}:\d{2})')
    # "Plan ważny do: 30 czerwca 2024" -> "30 czerwca 2024"
    _date_tail_regex = re.compile(r'(\d{1,2}\s+\w+\s+\d{4})\s*$')

    def __init__(self, locale: str = "pl"):
        self.locale = locale

    def _localized_date(self, text: str) -> date:
        match = self._date_tail_regex.search(text.strip())
        return parse_localized(match[1] if match else text, self.locale)

    @staticmethod
    def _parse_time(time_str: str) -> time:
        return datetime.strptime(time_str, "%H:%M").time()

    @staticmethod
    def _text(parent, name: str) -> str:
        tag = parent.find(class_=f'plan-item__{name}')
        return tag.get_text(" ", strip=True) if tag else ''

    def parse_valid_until(self, html: str) -> date:
        soup = BeautifulSoup(html, 'lxml')
        tag = soup.find(class_=self.valid_until_class)
        if tag is None:
            raise ScrapeError("Timetable page has no 'valid until' date")
        return self._localized_date(tag.get_text(" ", strip=True))

    def parse_entries(self, html: str) -> list[TimetableEntry]:
        soup = BeautifulSoup(html, 'lxml')
        entries: list[TimetableEntry] = []
        for day_div in soup.find_all('div', class_=self.day_class):
            title = day_div.find(class_=self.day_title_class)
            if title is None:
                logger.warning("Skipping day block without a title")
                continue
            day = self._localized_date(title.get_text(" ", strip=True))
            for item in day_div.find_all('div', class_=self.item_class):
                time_match = self._time_range_regex.search(self._text(item, 'time'))
                if not time_match:
                    logger.debug("No time range in item on %s, skipping", day)
                    continue
                entries.append(
                    TimetableEntry(
                        day=day,
                        start=self._parse_time(time_match[1]),
                        end=self._parse_time(time_match[2]),
                        subject=self._text(item, 'subject'),
                        room=self._text(item, 'room'),
                        lecturer=self._text(item, 'lecturer'),
                        kind=self._text(item, 'kind'),
                    )
                )
        logger.debug("Parsed %d timetable entries", len(entries))
        return entries
