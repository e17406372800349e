import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# ---------- Defaults ----------
MODEL_NAME = "gemini-2.5-flash"
MODEL_TEMP = 0.2
QUESTION_COUNT = 3

CAPTURE_WIDTH = 900
CAPTURE_SCALE = 2
PAGE_BACKGROUND = "#f8fafc"

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    model_name: str = MODEL_NAME
    temperature: float = MODEL_TEMP
    question_count: int = QUESTION_COUNT
    request_timeout: Optional[float] = None
    capture_width: int = CAPTURE_WIDTH
    capture_scale: int = CAPTURE_SCALE
    page_background: str = PAGE_BACKGROUND
    font_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings once from the process environment (and `.env`)."""
        return cls(
            api_key=os.getenv("GOOGLE_API_KEY") or None,
            model_name=os.getenv("POETIQUE_MODEL", MODEL_NAME),
            temperature=_env_float("POETIQUE_TEMPERATURE", MODEL_TEMP),
            question_count=_env_int("POETIQUE_QUESTION_COUNT", QUESTION_COUNT),
            request_timeout=_env_float("POETIQUE_REQUEST_TIMEOUT", None),
            capture_width=_env_int("POETIQUE_CAPTURE_WIDTH", CAPTURE_WIDTH),
            capture_scale=_env_int("POETIQUE_CAPTURE_SCALE", CAPTURE_SCALE),
            font_path=os.getenv("POETIQUE_FONT_PATH") or None,
            log_level=os.getenv("POETIQUE_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    if not settings.api_key:
        logging.getLogger(__name__).warning("GOOGLE_API_KEY not set; analysis requests will fail.")
