"""Configuration utilities.

Central place to load environment driven settings (file locations, source URL,
email credentials, etc.). The timetable config file itself, with login data and
the freshness timestamp, is handled by config_store.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass(slots=True)
class Settings:
    config_path: Path = Path(os.getenv("TIMETABLER_CONFIG", "config.properties"))
    cache_path: Path = Path(os.getenv("TIMETABLER_CACHE", "timetable.bin"))
    output_html: Path = Path(os.getenv("TIMETABLER_OUTPUT", "timetable.html"))
    timetable_url: str = os.getenv("TIMETABLE_URL", "https://plan.example.edu.pl/")
    locale: str = os.getenv("TIMETABLE_LOCALE", "pl")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    src_mail: str | None = os.getenv("SRC_MAIL")
    src_pwd: str | None = os.getenv("SRC_PWD")
    dst_mail: str | None = os.getenv("DST_MAIL")

    def email_configured(self) -> bool:
        return all([self.src_mail, self.src_pwd, self.dst_mail])


settings = Settings()
