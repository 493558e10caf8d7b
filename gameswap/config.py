"""Load swap finder configuration from config.toml with hardcoded fallbacks."""

import tomllib
from datetime import date, timedelta
from pathlib import Path

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.toml"

# TTM export for all GHA divisions. Found through the browser dev tools
# (Network tab) after clicking "TTM Export..." and choosing CSV.
_FALLBACK_SCHEDULE_URL = (
    "https://api.off-iceoffice.ca/ooAPI/v1/schedules/"
    "games/?orgID=1567976101-7023700001&option1=88&option2=9999&option3=2"
)
_FALLBACK_SCHEDULE_PATH = "schedule.csv"
_FALLBACK_TIMEOUT = 30
_FALLBACK_CUTOFF_DAYS = 10
_FALLBACK_OUTPUT_DIR = "."


def _load_config() -> dict:
    """Load and return the parsed config.toml, or empty dict if missing."""
    try:
        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def get_schedule_url() -> str:
    """Return the URL of the schedule export."""
    cfg = _load_config()
    return cfg.get("schedule", {}).get("url", _FALLBACK_SCHEDULE_URL)


def get_schedule_path() -> Path:
    """Return where the downloaded schedule CSV is kept."""
    cfg = _load_config()
    return Path(cfg.get("schedule", {}).get("path", _FALLBACK_SCHEDULE_PATH))


def get_request_timeout() -> int:
    """Return the HTTP timeout in seconds for the schedule download."""
    cfg = _load_config()
    return cfg.get("schedule", {}).get("timeout", _FALLBACK_TIMEOUT)


def get_cutoff_days() -> int:
    """Return how many days from today are too soon to swap."""
    cfg = _load_config()
    return cfg.get("swaps", {}).get("cutoff_days", _FALLBACK_CUTOFF_DAYS)


def get_output_dir() -> Path:
    """Return the directory swap result files are written to."""
    cfg = _load_config()
    return Path(cfg.get("swaps", {}).get("output_dir", _FALLBACK_OUTPUT_DIR))


def get_cutoff_date(today: date | None = None) -> date:
    """Return the cutoff date: games on or before it are not considered."""
    if today is None:
        today = date.today()
    return today + timedelta(days=get_cutoff_days())
