"""Mail the rendered timetable page with yagmail."""
import logging

import yagmail

from .config import settings
from .freshness import RunResult

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "Plan zajęć"


def build_subject(result: RunResult) -> str:
    """e.g. "Plan zajęć (nowy), ważny do 2024-06-30"."""
    origin = "nowy" if result.source == "scrape" else "z pamięci podręcznej"
    subject = f"{SUBJECT_PREFIX} ({origin})"
    if result.timetable.valid_until:
        subject += f", ważny do {result.timetable.valid_until.isoformat()}"
    if result.degraded:
        subject += " [nie zapisano w cache]"
    return subject


def send_timetable(result: RunResult, html: str) -> None:
    if not settings.email_configured():
        logger.warning("Timetable not mailed: SRC_MAIL, SRC_PWD and DST_MAIL must all be set.")
        return
    subject = build_subject(result)
    with yagmail.SMTP(settings.src_mail, settings.src_pwd, port=587, smtp_starttls=True, smtp_ssl=False) as yag:
        yag.send(to=settings.dst_mail, subject=subject, contents=html)
    logger.info("Timetable mailed to %s: %s", settings.dst_mail, subject)
