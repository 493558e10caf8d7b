"""Client for the Total Team Management (TTM) schedule export.

The export endpoint returns a JSON envelope ``{"id": ..., "data": "..."}``
where ``data`` is a base64-encoded JSON array of games.
"""

import base64
import binascii
import json
from pathlib import Path

import pandas as pd
import requests

from gameswap.errors import OutputWriteError, ScheduleFetchError

# TTM field names, in schedule row order
TTM_FIELDS = [
    "division", "gameID", "gameDate", "gameTime", "venue", "homeTeam", "awayTeam",
]

CSV_HEADER = ["Division", "GameID", "Date", "Time", "Arena", "Home Team", "Away Team"]


def _get(url: str, timeout: int = 30) -> dict:
    """Make a GET request to the TTM API and return the JSON envelope."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise ScheduleFetchError(f"Error fetching schedule from {url}: {e}") from e
    except ValueError as e:
        raise ScheduleFetchError(f"Error unmarshalling TTM response: {e}") from e


def decode_envelope(envelope: dict) -> list[dict]:
    """Decode the base64 ``data`` field of a TTM response into game records."""
    if not isinstance(envelope, dict):
        raise ScheduleFetchError("TTM response is not a JSON object")
    encoded = envelope.get("data")
    if not isinstance(encoded, str):
        raise ScheduleFetchError("TTM response has no data field")
    try:
        decoded = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ScheduleFetchError(f"Error decoding base64 data: {e}") from e
    try:
        records = json.loads(decoded)
    except ValueError as e:
        raise ScheduleFetchError(f"Error decoding the schedule rows: {e}") from e
    if not isinstance(records, list):
        raise ScheduleFetchError("Decoded schedule is not a list of games")
    for g in records:
        if not isinstance(g, dict):
            raise ScheduleFetchError(f"Schedule row is not a game record: {g!r}")
    return records


def records_to_rows(records: list[dict]) -> list[list[str]]:
    """Convert TTM game records to positional schedule rows."""
    rows = []
    for g in records:
        rows.append([str(g.get(key) or "") for key in TTM_FIELDS])
    return rows


def download_schedule(url: str, timeout: int = 30, log=print) -> list[list[str]]:
    """Download the schedule and return it as positional rows."""
    log(f"Downloading schedule from {url}")
    envelope = _get(url, timeout=timeout)
    log("Decoding base64 encoded data")
    rows = records_to_rows(decode_envelope(envelope))
    log(f"  {len(rows)} games downloaded")
    return rows


def save_schedule_csv(rows: list[list[str]], path: Path) -> Path:
    """Write schedule rows to CSV with a header line."""
    df = pd.DataFrame(rows, columns=CSV_HEADER)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
    except OSError as e:
        raise OutputWriteError(f"Could not create CSV file {path}: {e}") from e
    return path
