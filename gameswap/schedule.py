"""In-memory game schedule built from positional rows.

Rows come from a CSV export, a decoded TTM payload or a test fixture. Each row
is read by position:

  division, game id, date (YYYY-MM-DD), time, venue, home team, away team, [status]

A row whose date does not parse (the CSV header, a corrupt line) is kept as a
malformed record and skipped by every filter. A row with too few fields is
dropped when the schedule is built.
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Sequence

from gameswap.errors import GameNotFound
from gameswap.names import normalize

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Positional fields in a schedule row
DIVISION = 0
GAME_ID = 1
DATE = 2
TIME = 3
VENUE = 4
HOME_TEAM = 5
AWAY_TEAM = 6
GAME_STATUS = 7

MIN_FIELDS = AWAY_TEAM + 1
MAX_FIELDS = GAME_STATUS + 1


def parse_game_date(text: str) -> Optional[date]:
    """Parse a YYYY-MM-DD date, returning None if it doesn't match exactly."""
    text = text.strip()
    if not _DATE_RE.match(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


@dataclass(frozen=True)
class GameRecord:
    """One scheduled game."""
    division: str
    game_id: str
    date_text: str
    game_date: Optional[date]
    time: str
    venue: str
    home_team: str
    away_team: str
    status: str = ""

    @classmethod
    def from_row(cls, row: Sequence[str]) -> Optional["GameRecord"]:
        """Build a record from a positional row, or None if fields are missing."""
        if len(row) < MIN_FIELDS:
            return None
        fields = ["" if v is None else str(v).strip() for v in row]
        return cls(
            division=fields[DIVISION],
            game_id=fields[GAME_ID],
            date_text=fields[DATE],
            game_date=parse_game_date(fields[DATE]),
            time=fields[TIME],
            venue=fields[VENUE],
            home_team=fields[HOME_TEAM],
            away_team=fields[AWAY_TEAM],
            status=fields[GAME_STATUS] if len(fields) > GAME_STATUS else "",
        )

    @property
    def is_malformed(self) -> bool:
        return self.game_date is None

    @property
    def home(self) -> str:
        """Normalized home team name."""
        return normalize(self.home_team)

    @property
    def away(self) -> str:
        """Normalized away team name."""
        return normalize(self.away_team)

    def to_row(self) -> list[str]:
        return [
            self.division, self.game_id, self.date_text, self.time,
            self.venue, self.home_team, self.away_team,
        ]

    def __str__(self):
        return ",".join(self.to_row())


class ScheduleSet:
    """An ordered, read-only collection of game records."""

    def __init__(self, records: Iterable[GameRecord] = ()):
        self._records = tuple(records)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "ScheduleSet":
        records = []
        for row in rows:
            record = GameRecord.from_row(row)
            if record is not None:
                records.append(record)
        return cls(records)

    @property
    def records(self) -> tuple[GameRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[GameRecord]:
        return iter(self._records)

    def __repr__(self):
        return f"ScheduleSet({len(self._records)} games)"

    def find_by_id(self, game_id: str) -> GameRecord:
        """Return the first record with the given game id."""
        for record in self._records:
            if record.game_id == game_id:
                return record
        raise GameNotFound(game_id)

    def filter(self, predicate: Callable[[GameRecord], bool]) -> "ScheduleSet":
        """Return a new set of the records satisfying predicate, order preserved."""
        return ScheduleSet(r for r in self._records if predicate(r))

    def well_formed(self) -> "ScheduleSet":
        """Return only the records whose date parsed."""
        return self.filter(lambda r: not r.is_malformed)

    @staticmethod
    def contains_team(record: GameRecord, name: str) -> bool:
        """True if the record's home or away team is the given team."""
        team = normalize(name)
        return record.home == team or record.away == team

    def game_ids(self) -> list[str]:
        return [r.game_id for r in self._records]


def load_schedule_csv(path: Path | str) -> ScheduleSet:
    """Load a schedule CSV of positional rows.

    Every value is read as text so game ids and dates are untouched. Each line
    keeps its real field count: lines with more than eight fields are skipped,
    and lines with fewer than seven are dropped by ScheduleSet.from_rows.
    """
    with open(path, newline="") as f:
        rows = [row for row in csv.reader(f) if row and len(row) <= MAX_FIELDS]
    return ScheduleSet.from_rows(rows)
