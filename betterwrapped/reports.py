"""Rankings and human-readable summaries of aggregated listening data."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence, TypeVar, Union

from .models import ArtistAggregation, TrackAggregation
from .store import DataError

_Agg = TypeVar("_Agg", TrackAggregation, ArtistAggregation)
_Source = Union[Iterable[_Agg], Mapping[str, _Agg]]


def _items(aggregations: _Source) -> Iterable[_Agg]:
    if isinstance(aggregations, Mapping):
        return aggregations.values()
    return aggregations


def favorite(aggregations: _Source) -> _Agg:
    """Return the entry with the most listening time; the first one wins ties."""
    best = max(_items(aggregations), key=lambda item: item.ms_played, default=None)
    if best is None:
        raise DataError("No favorite found")
    return best


def least_favorite(aggregations: _Source) -> _Agg:
    """Return the entry with the least positive listening time.

    The first entry is the starting candidate; later entries replace it only
    when their time is lower and above zero.
    """
    items = iter(_items(aggregations))
    worst = next(items, None)
    if worst is None:
        raise DataError("No least favorite found")
    for item in items:
        if 0 < item.ms_played < worst.ms_played:
            worst = item
    return worst


def top(aggregations: _Source, amount: int) -> list[_Agg]:
    """Return the ``amount`` entries with the most listening time, highest first."""
    if amount < 0:
        raise ValueError("amount must not be negative")
    ranked = sorted(_items(aggregations), key=lambda item: item.ms_played, reverse=True)
    if amount > len(ranked):
        raise ValueError(f"only {len(ranked)} entries available, {amount} requested")
    return ranked[:amount]


def minutes(ms_played: int) -> int:
    """Convert milliseconds to whole minutes, truncating toward zero."""
    whole = abs(ms_played) // 1000 // 60
    return -whole if ms_played < 0 else whole


def describe_favorite_track(track: TrackAggregation) -> str:
    """Describe the favorite track."""
    return "\n".join(
        [
            "Your favorite track is:",
            f"  Track name:  {track.track_name}",
            f"  Album name:  {track.album_name}",
            f"  Album artist name:  {track.album_artist_name}",
            f"  Minutes listened:  {minutes(track.ms_played)}",
        ]
    )


def describe_favorite_artist(artist: ArtistAggregation) -> str:
    """Describe the favorite artist."""
    return "\n".join(
        [
            "Your favorite artist is:",
            f"  Artist name:  {artist.artist_name}",
            f"  Minutes listened:  {minutes(artist.ms_played)}",
        ]
    )


def describe_hated_track(track: TrackAggregation) -> str:
    """Describe the least favorite track."""
    return "\n".join(
        [
            "Your least favorite track is:",
            f"  Track name:  {track.track_name}",
            f"  Album name:  {track.album_name}",
            f"  Album artist name:  {track.album_artist_name}",
            f"  Milliseconds listened:  {track.ms_played}",
        ]
    )


def describe_hated_artist(artist: ArtistAggregation) -> str:
    """Describe the least favorite artist."""
    return "\n".join(
        [
            "Your least favorite artist is:",
            f"  Artist name:  {artist.artist_name}",
            f"  Milliseconds listened:  {artist.ms_played}",
        ]
    )


def describe_top_tracks(tracks: Sequence[TrackAggregation]) -> str:
    """Describe a ranked list of tracks."""
    lines = ["Top tracks:"]
    lines.extend(
        f"{rank}. {track.track_name} - {track.album_name} - {track.album_artist_name}"
        f" ({minutes(track.ms_played)} min)"
        for rank, track in enumerate(tracks, start=1)
    )
    return "\n".join(lines)


def describe_top_artists(artists: Sequence[ArtistAggregation]) -> str:
    """Describe a ranked list of artists."""
    lines = ["Top artists:"]
    lines.extend(
        f"{rank}. {artist.artist_name} ({minutes(artist.ms_played)} min)"
        for rank, artist in enumerate(artists, start=1)
    )
    return "\n".join(lines)


def describe_count(count: int, kind: str) -> str:
    """Describe how many different items were listened to; ``kind`` is a plural noun."""
    return f"You have listened to {count} different {kind}."