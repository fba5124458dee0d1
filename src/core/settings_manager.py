"""Settings manager — reads settings.ini via configparser.

The file is optional and read-only: every value has a fallback in
src.core.constants, and nothing is written back.
"""
from configparser import ConfigParser
from pathlib import Path

from src.core import constants

COMMENT_PREFIX = "#"


class SettingsManager:
    def __init__(self, ini_path: Path) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=(COMMENT_PREFIX, ";"), inline_comment_prefixes=(COMMENT_PREFIX,))
        if ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def getint(self, section: str, key: str, fallback: int = 0) -> int:
        try:
            return self.config.getint(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        try:
            return self.config.getboolean(section, key, fallback=fallback)
        except ValueError:
            return fallback

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def id_file(self) -> Path:
        return Path(self.get("GENERAL", "id_file", constants.ID_FILE))

    @property
    def cooldown_ms(self) -> int:
        value = self.getint("TIMER", "cooldown_ms", constants.COOLDOWN_MS)
        return value if value > 0 else constants.COOLDOWN_MS

    @property
    def frame_ms(self) -> int:
        return max(0, self.getint("TIMER", "frame_ms", constants.FRAME_MS))

    @property
    def keywait(self) -> int:
        return max(0, self.getint("INPUT", "keywait", constants.KEY_INPUT_DELAY_MS))

    @property
    def allow_overlap(self) -> bool:
        return self.getbool("INPUT", "allow_overlap", True)

    @property
    def log_max_lines(self) -> int:
        return max(1, self.getint("LOG", "max_lines", constants.LOG_MAX_LINES))

    @property
    def log_level(self) -> str:
        return self.get("LOG", "level", "INFO").upper()
