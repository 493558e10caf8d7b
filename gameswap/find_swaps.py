"""Find potential game swaps for a GHA game.

Downloads the current schedule, looks up the game to swap and records every
eligible game in <game id>.csv.

Usage:
    python -m gameswap.find_swaps HLU1501
    python -m gameswap.find_swaps --no-download --cutoff 2026-01-15 HLU1501
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from gameswap import config, schedule_client, swap_report
from gameswap.errors import (
    OutputWriteError,
    PastCutoff,
    ScheduleFetchError,
    SwapResolutionError,
)
from gameswap.schedule import ScheduleSet, load_schedule_csv
from gameswap.swap_resolver import resolve

EXIT_OK = 0
EXIT_RESOLUTION = 1
EXIT_FETCH = 2
EXIT_WRITE = 3


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Find games that can be swapped with a scheduled game"
    )
    parser.add_argument("game_id", nargs="?", help="Id of the game to swap (i.e. HLU1501)")
    parser.add_argument(
        "--cutoff",
        type=date.fromisoformat,
        help="Ignore games on or before this date (default: today + cutoff_days)",
    )
    parser.add_argument("--schedule", type=Path, help="Schedule CSV path")
    parser.add_argument(
        "--no-download",
        action="store_true",
        help="Use the schedule CSV already on disk",
    )
    parser.add_argument("--output-dir", type=Path, help="Where to write <game id>.csv")
    parser.add_argument("--verbose", action="store_true", help="Show why each game was dropped")
    return parser.parse_args(argv)


def _prompt_game_id() -> str:
    return input("Enter Id of game to swap (i.e. HLU1501): ").strip()


def load_schedule(path: Path, download: bool = True, log=print) -> ScheduleSet:
    """Refresh the schedule CSV from TTM (unless told not to) and load it."""
    if download:
        rows = schedule_client.download_schedule(
            config.get_schedule_url(), timeout=config.get_request_timeout(), log=log
        )
        schedule_client.save_schedule_csv(rows, path)
        log(f"  Saved {path}")
    elif not path.exists():
        raise ScheduleFetchError(f"Schedule file {path} does not exist")
    log(f"Reading schedule file: {path}")
    return load_schedule_csv(path)


def main(argv=None) -> int:
    args = _parse_args(argv)
    schedule_path = args.schedule or config.get_schedule_path()
    output_dir = args.output_dir or config.get_output_dir()
    cutoff = args.cutoff or config.get_cutoff_date()

    try:
        schedule = load_schedule(schedule_path, download=not args.no_download)
    except ScheduleFetchError as e:
        print(f"ERROR: {e}")
        return EXIT_FETCH
    except OutputWriteError as e:
        print(f"ERROR: {e}")
        return EXIT_WRITE
    print(f"  {len(schedule)} lines in schedule")

    game_id = args.game_id
    if not game_id:
        try:
            game_id = _prompt_game_id()
        except EOFError:
            print("ERROR: no game id given")
            return EXIT_RESOLUTION
    try:
        request = resolve(schedule, game_id, cutoff, log=print if args.verbose else None)
    except PastCutoff as e:
        swap_report.print_target(e.request)
        print(f"Game date is before cut off date of {e.cutoff.isoformat()}")
        print("No point in continuing")
        return EXIT_RESOLUTION
    except SwapResolutionError as e:
        print(f"ERROR: {e}")
        return EXIT_RESOLUTION

    swap_report.print_target(request)
    swap_report.print_swap_summary(request)
    try:
        path = swap_report.write_swap_csv(request, output_dir)
    except OutputWriteError as e:
        print(f"ERROR: {e}")
        return EXIT_WRITE
    print(f"Recorded {len(request.candidates)} potential matches to {path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
