"""Reading raw streaming history and reading/writing the aggregated files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar, Union

from .models import (
    AGGREGATED_ARTIST_DATA_FILE,
    AGGREGATED_TRACK_DATA_FILE,
    DATA_DIR,
    ArtistAggregation,
    PlaybackEvent,
    TrackAggregation,
)

PathLike = Union[str, "os.PathLike[str]"]
_Agg = TypeVar("_Agg", TrackAggregation, ArtistAggregation)

_HISTORY_MARKER = "Streaming_History_Audio"
_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class DataError(Exception):
    """Raised when listening data is missing or cannot be read."""


def is_history_file(name: str) -> bool:
    """Tell whether a file name looks like a raw audio streaming history export."""
    if name in (AGGREGATED_TRACK_DATA_FILE, AGGREGATED_ARTIST_DATA_FILE):
        return False
    return ".json" in name and _HISTORY_MARKER in name


def aggregate_events(
    events: Iterable[PlaybackEvent],
    tracks: dict[str, TrackAggregation],
    artists: dict[str, ArtistAggregation],
) -> tuple[dict[str, TrackAggregation], dict[str, ArtistAggregation]]:
    """Add the listening time of track events to the track and artist totals.

    Events without a track URI (podcasts, audiobooks) are ignored. The given
    dictionaries are updated in place and returned.
    """
    for event in events:
        uri = event.spotify_track_uri
        if uri is None:
            continue
        artist_name = event.album_artist_name
        if artist_name is None:
            raise DataError(f"track event {uri!r} has no album artist name")

        track = tracks.get(uri)
        if track is None:
            tracks[uri] = TrackAggregation(
                ms_played=event.ms_played,
                track_name=event.track_name,
                album_artist_name=event.album_artist_name,
                album_name=event.album_name,
            )
        else:
            track.ms_played += event.ms_played

        artist = artists.get(artist_name)
        if artist is None:
            artists[artist_name] = ArtistAggregation(
                ms_played=event.ms_played, artist_name=artist_name
            )
        else:
            artist.ms_played += event.ms_played
    return tracks, artists


def _read_events(path: Path) -> list[PlaybackEvent]:
    try:
        content = json.loads(path.read_bytes())
    except OSError as exc:
        raise DataError(f"cannot read {path.name}: {exc}") from exc
    except ValueError as exc:
        raise DataError(f"invalid JSON in {path.name}: {exc}") from exc
    if content is None:
        return []
    if not isinstance(content, list):
        raise DataError(f"{path.name} does not hold a list of playback events")
    try:
        return [PlaybackEvent.from_dict(item) for item in content if item is not None]
    except ValueError as exc:
        raise DataError(f"bad playback event in {path.name}: {exc}") from exc


def _encode(mapping: dict[str, Any]) -> str:
    text = json.dumps(
        {key: value.to_dict() for key, value in mapping.items()},
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
    )
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text + "\n"


def _write(path: Path, mapping: dict[str, Any]) -> None:
    try:
        path.write_text(_encode(mapping), encoding="utf-8")
    except OSError as exc:
        raise DataError(f"cannot write {path}: {exc}") from exc


def parse_data(
    data_dir: PathLike = DATA_DIR,
) -> tuple[dict[str, TrackAggregation], dict[str, ArtistAggregation]]:
    """Aggregate every history file in the data directory and write the results.

    Prints the name of each file as it is parsed. Returns the track and artist
    aggregations that were written.
    """
    directory = Path(data_dir)
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise DataError(str(exc)) from exc
    if not entries:
        raise DataError("No data found in data directory")

    tracks: dict[str, TrackAggregation] = {}
    artists: dict[str, ArtistAggregation] = {}
    for entry in entries:
        if entry.is_dir() or not is_history_file(entry.name):
            continue
        print("Parsing file: ", entry.name)
        aggregate_events(_read_events(entry), tracks, artists)

    _write(directory / AGGREGATED_ARTIST_DATA_FILE, artists)
    _write(directory / AGGREGATED_TRACK_DATA_FILE, tracks)
    return tracks, artists


def _load(path: Path, factory: Callable[[Any], _Agg]) -> dict[str, _Agg]:
    try:
        with path.open("rb") as handle:
            content = json.load(handle)
    except OSError as exc:
        raise DataError(f"cannot read {path}: {exc}") from exc
    except ValueError as exc:
        raise DataError(f"invalid JSON in {path}: {exc}") from exc
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise DataError(f"{path} does not hold a JSON object")
    try:
        return {key: factory({} if value is None else value) for key, value in content.items()}
    except ValueError as exc:
        raise DataError(f"bad entry in {path}: {exc}") from exc


def load_tracks(data_dir: PathLike = DATA_DIR) -> dict[str, TrackAggregation]:
    """Load listening time aggregated by track URI."""
    return _load(Path(data_dir) / AGGREGATED_TRACK_DATA_FILE, TrackAggregation.from_dict)


def load_artists(data_dir: PathLike = DATA_DIR) -> dict[str, ArtistAggregation]:
    """Load listening time aggregated by artist name."""
    return _load(Path(data_dir) / AGGREGATED_ARTIST_DATA_FILE, ArtistAggregation.from_dict)