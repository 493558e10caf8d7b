"""Exceptions raised by the swap finder.

Resolution errors come from bad input (unknown game, game too soon, etc.) and
are reported to the user as-is. Collaborator errors (download, output) are kept
separate so callers can tell "can't get data" apart from "no valid swap".
"""

from __future__ import annotations

from datetime import date


class SwapFinderError(Exception):
    """Base class for all swap finder errors."""


class RegistryConfigError(SwapFinderError):
    """The division registry is not exhaustive or not mutually exclusive."""


class SwapResolutionError(SwapFinderError):
    """A swap request could not be resolved from the given input."""


class GameNotFound(SwapResolutionError):
    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game '{game_id}' not found in schedule")


class MalformedTargetDate(SwapResolutionError):
    def __init__(self, game_id: str, date_text: str):
        self.game_id = game_id
        self.date_text = date_text
        super().__init__(
            f"Game '{game_id}' has an unparsable date '{date_text}' (expected YYYY-MM-DD)"
        )


class AmbiguousDivision(SwapResolutionError):
    def __init__(self, division: str, matches: list[str]):
        self.division = division
        self.matches = matches
        if matches:
            detail = f"matches {', '.join(matches)}"
        else:
            detail = "matches no known division"
        super().__init__(f"Division '{division}' {detail}")


class PastCutoff(SwapResolutionError):
    """The target game is on or before the cutoff date.

    ``request`` holds the partially resolved swap with an empty candidate list.
    """

    def __init__(self, game_id: str, game_date: date, cutoff: date, request=None):
        self.game_id = game_id
        self.game_date = game_date
        self.cutoff = cutoff
        self.request = request
        super().__init__(
            f"Game '{game_id}' on {game_date.isoformat()} is not after the "
            f"cut off date of {cutoff.isoformat()}"
        )


class ScheduleFetchError(SwapFinderError):
    """The schedule could not be downloaded or decoded."""


class OutputWriteError(SwapFinderError):
    """The swap results could not be written."""
