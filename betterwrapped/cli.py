"""Command-line interface for exploring aggregated listening history."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import reports
from .models import DATA_DIR
from .store import DataError, PathLike, load_artists, load_tracks, parse_data

_AMOUNT = re.compile(r"[+-]?\d+")
_MIN_AMOUNT = 1
_MAX_AMOUNT = 10

_COUNT_USAGE = "Please provide 'artist' or 'track' as an argument."
_FAVORITE_USAGE = "Please specify 'track' or 'artist' as argument."
_HATE_USAGE = "Please specify 'artist' or 'track' as argument."
_TOP_USAGE = "Please specify 'track' or 'artist' and an amount as argument."
_TOP_KIND_USAGE = "Please specify 'track' or 'artist' as argument."
_TOP_AMOUNT_USAGE = "Invalid amount argument, please specify an integer between 1 and 10."


def parse_amount(amount: str) -> int:
    """Parse the amount for the ``top`` command; raise ValueError unless it is 1 to 10."""
    if not _AMOUNT.fullmatch(amount):
        raise ValueError(f"not an integer: {amount!r}")
    value = int(amount)
    if not _MIN_AMOUNT <= value <= _MAX_AMOUNT:
        raise ValueError(f"amount out of range: {value}")
    return value


def help_text() -> str:
    """Return the usage message."""
    return "\n".join(
        [
            "Usage: \n bsw [command] [options]",
            "Available Commands:",
            "  parse - Parse raw Spotify listening data to an aggregated JSON file. "
            "Expects the Spotify data in the data folder (created automatically in the "
            "first run). This command must be run before any other commands.",
            "  favorite <artist|track> - Show information about your favorite artist ortrack.",
            "  top <artist|track> <amount> - Show the top artists or tracks by listening time.",
            "  hate <artist|track> - Show information about your least favorite artist or track.",
            "  count <artist|track> - Count the number of different artists or tracks "
            "you have listened to.",
        ]
    )


def _kind(args: Sequence[str]) -> Optional[str]:
    return args[0].lower() if args else None


def _parse(args: Sequence[str], data_dir: PathLike) -> None:
    print("Parsing Spotify data...")
    parse_data(data_dir)


def _favorite(args: Sequence[str], data_dir: PathLike) -> None:
    kind = _kind(args)
    try:
        if kind == "track":
            print(reports.describe_favorite_track(reports.favorite(load_tracks(data_dir))))
        elif kind == "artist":
            print(reports.describe_favorite_artist(reports.favorite(load_artists(data_dir))))
        else:
            print(_FAVORITE_USAGE)
    except DataError as exc:
        if str(exc) == "No favorite found":
            raise DataError(f"No favorite {kind} found") from exc
        raise


def _hate(args: Sequence[str], data_dir: PathLike) -> None:
    kind = _kind(args)
    try:
        if kind == "artist":
            print(reports.describe_hated_artist(reports.least_favorite(load_artists(data_dir))))
        elif kind == "track":
            print(reports.describe_hated_track(reports.least_favorite(load_tracks(data_dir))))
        else:
            print(_HATE_USAGE)
    except DataError as exc:
        if str(exc) == "No least favorite found":
            raise DataError(f"No least favorite {kind} found") from exc
        raise


def _top(args: Sequence[str], data_dir: PathLike) -> None:
    if len(args) < 2:
        print(_TOP_USAGE)
        return
    try:
        amount = parse_amount(args[1])
    except ValueError:
        print(_TOP_AMOUNT_USAGE)
        return
    kind = args[0].lower()
    if kind == "track":
        print(reports.describe_top_tracks(reports.top(load_tracks(data_dir), amount)))
    elif kind == "artist":
        print(reports.describe_top_artists(reports.top(load_artists(data_dir), amount)))
    else:
        print(_TOP_KIND_USAGE)


def _count(args: Sequence[str], data_dir: PathLike) -> None:
    kind = _kind(args)
    if kind == "artist":
        print(reports.describe_count(len(load_artists(data_dir)), "artists"))
    elif kind == "track":
        print(reports.describe_count(len(load_tracks(data_dir)), "tracks"))
    else:
        print(_COUNT_USAGE)


_COMMANDS = {
    "parse": _parse,
    "favorite": _favorite,
    "top": _top,
    "hate": _hate,
    "count": _count,
}


def run(args: Sequence[str], data_dir: PathLike = DATA_DIR) -> None:
    """Run one command given its arguments (without the program name).

    Unknown commands and an empty argument list print the usage message.
    Raises DataError when data is missing or unreadable, and ValueError when
    more entries are requested than exist.
    """
    if not args:
        print(help_text())
        return
    command = _COMMANDS.get(args[0].lower())
    if command is None:
        print(help_text())
        return
    command(args[1:], data_dir)


def _init_data_dir(data_dir: Path) -> None:
    if not data_dir.exists():
        data_dir.mkdir(mode=0o755)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: ensure the data directory exists, then run the command."""
    args = list(sys.argv[1:] if argv is None else argv)
    data_dir = Path(DATA_DIR)
    try:
        _init_data_dir(data_dir)
        run(args, data_dir)
    except (OSError, DataError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())