# core/config.py

import os
import tempfile
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    gemini_model: str = DEFAULT_MODEL
    log_level: str = "INFO"
    export_dir: str = tempfile.gettempdir()


def load_settings() -> Settings:
    """
    Read settings from the environment (and `.env` if present).
    The Gemini key is NOT checked here: a missing key makes each call fail
    at the transport layer, which the services already handle.
    """
    load_dotenv()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        export_dir=os.getenv("EXPORT_DIR") or tempfile.gettempdir(),
    )
