"""Print and save the games found for a swap."""

from pathlib import Path

import pandas as pd

from gameswap.errors import OutputWriteError
from gameswap.swap_resolver import SwapRequest

OUTPUT_COLUMNS = ["Division", "Game ID", "Date", "Time", "Arena", "Home Team", "Away Team"]


def print_target(request: SwapRequest, log=print) -> None:
    """Print the game being swapped and the divisions searched."""
    log(f"Game date:  {request.game_date.isoformat()}")
    log(f"Home team:  {request.home}")
    log(f"Away team:  {request.away}")
    log(f"Your division:  {request.division.name}")
    log(f"Searching for swaps with the following divisions:  {request.division.swaps}")


def print_swap_summary(request: SwapRequest, log=print) -> None:
    """Print the exclusions and every candidate game."""
    dates = ", ".join(d.isoformat() for d in request.excluded_dates_sorted())
    log(f"Dates {request.home} / {request.away} already play: {dates or 'none'}")
    teams = request.excluded_teams_listed()
    log(f"Teams already playing on {request.game_date.isoformat()}: {len(teams)}")
    for team in teams:
        log(f"  {team}")

    if not len(request.candidates):
        log("No eligible games found")
        return
    for game in request.candidates:
        log(str(game))


def swap_dataframe(request: SwapRequest) -> pd.DataFrame:
    """Candidate games as a DataFrame, in schedule order."""
    rows = [game.to_row() for game in request.candidates]
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def write_swap_csv(request: SwapRequest, output_dir: Path = Path(".")) -> Path:
    """Save the candidate games to <game id>.csv and return the path."""
    if request.game_id in ("", ".", "..") or any(sep in request.game_id for sep in "/\\"):
        raise OutputWriteError(f"Game id '{request.game_id}' is not a valid file name")
    path = Path(output_dir) / f"{request.game_id}.csv"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        swap_dataframe(request).to_csv(path, index=False)
    except OSError as e:
        raise OutputWriteError(f"Could not write swap results to {path}: {e}") from e
    return path
