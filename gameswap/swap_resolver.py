"""Find games that can be swapped with a given game.

General algorithm:
  1. find the game to swap, its teams and its division
  2. drop games on or before the cut off date and games in divisions that
     can't swap with ours
  3. drop dates on which either of our teams already plays
  4. drop teams already playing on the day of the game we want to swap

Exclusions (3, 4) are gathered from the whole schedule, not just the swappable
divisions: our teams and the teams busy on the swap date may be playing in any
division.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from gameswap.divisions import DIVISIONS, DivisionRule, resolve_division
from gameswap.errors import MalformedTargetDate, PastCutoff
from gameswap.names import add_unique, normalize
from gameswap.schedule import GameRecord, ScheduleSet

Log = Callable[[str], None]


@dataclass
class SwapRequest:
    """Working state for one swap resolution."""
    game_id: str
    game_date: date
    home: str
    away: str
    division: DivisionRule
    cutoff: date
    exclude_dates: set[date] = field(default_factory=set)
    exclude_teams: set[str] = field(default_factory=set)
    candidates: ScheduleSet = field(default_factory=ScheduleSet)
    # Presentation order of excluded teams (first seen in the schedule)
    excluded_team_order: list[str] = field(default_factory=list)

    @property
    def teams(self) -> tuple[str, str]:
        return self.home, self.away

    def excluded_dates_sorted(self) -> list[date]:
        return sorted(self.exclude_dates)

    def excluded_teams_listed(self) -> list[str]:
        return list(self.excluded_team_order)


def _drop_reason(record: GameRecord, cutoff: date, rule: DivisionRule) -> Optional[str]:
    """Why a record is outside the candidate universe, or None to keep it."""
    if record.game_date is None:
        # probably the header line
        return "malformed date"
    if record.game_date <= cutoff:
        return "before cutoff date"
    if not rule.is_compatible(record.division):
        return "wrong division"
    return None


def _trace(log: Optional[Log], record: GameRecord, reason: str) -> None:
    if log is not None:
        log(f"{record} << {reason}")


def candidate_universe(
    schedule: ScheduleSet,
    cutoff: date,
    rule: DivisionRule,
    log: Optional[Log] = None,
) -> ScheduleSet:
    """Games after the cutoff in a division that can swap with ``rule``."""
    def keep(record: GameRecord) -> bool:
        reason = _drop_reason(record, cutoff, rule)
        if reason is not None:
            _trace(log, record, reason)
        return reason is None

    return schedule.filter(keep)


def build_exclusions(
    schedule: ScheduleSet,
    request: SwapRequest,
    log: Optional[Log] = None,
) -> None:
    """Fill in the request's excluded dates and teams from the full schedule."""
    for record in schedule.well_formed():
        if record.home in request.teams or record.away in request.teams:
            request.exclude_dates.add(record.game_date)
            _trace(log, record, "swapping team")

        # Every team already playing on the day of the swap game is busy
        if record.game_date == request.game_date:
            _trace(log, record, "playing on swap date")
            request.exclude_teams.add(record.home)
            request.exclude_teams.add(record.away)
            add_unique(request.excluded_team_order, record.home_team)
            add_unique(request.excluded_team_order, record.away_team)


def _is_free(record: GameRecord, request: SwapRequest) -> bool:
    return (
        record.game_date not in request.exclude_dates
        and record.home not in request.exclude_teams
        and record.away not in request.exclude_teams
    )


def resolve(
    schedule: ScheduleSet,
    target_game_id: str,
    cutoff: date,
    rules: tuple[DivisionRule, ...] = DIVISIONS,
    log: Optional[Log] = None,
) -> SwapRequest:
    """Resolve the swap candidates for a game.

    Raises GameNotFound, MalformedTargetDate, AmbiguousDivision or PastCutoff.
    The schedule is never modified.
    """
    target = schedule.find_by_id(target_game_id)
    if target.game_date is None:
        raise MalformedTargetDate(target.game_id, target.date_text)

    request = SwapRequest(
        game_id=target.game_id,
        game_date=target.game_date,
        home=normalize(target.home_team),
        away=normalize(target.away_team),
        division=resolve_division(target.division, rules),
        cutoff=cutoff,
    )

    # No point in swapping a game that is too close
    if request.game_date <= cutoff:
        raise PastCutoff(request.game_id, request.game_date, cutoff, request)

    universe = candidate_universe(schedule, cutoff, request.division, log)
    build_exclusions(schedule, request, log)

    request.candidates = universe.filter(lambda r: _is_free(r, request))
    if log is not None:
        log(
            f"{len(universe)} games in swappable divisions, "
            f"{len(request.candidates)} after exclusions"
        )
    return request
