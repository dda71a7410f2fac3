"""Data types for raw playback events and aggregated listening statistics."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

DATA_DIR = "data"
"""Directory where the raw listening history and aggregated files live."""

AGGREGATED_TRACK_DATA_FILE = "aggregated_tracks.json"
"""File holding listening time aggregated by track URI."""

AGGREGATED_ARTIST_DATA_FILE = "aggregated_artists.json"
"""File holding listening time aggregated by artist name."""

_TIMESTAMP = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    match = _TIMESTAMP.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    date, clock, fraction, zone = match.groups()
    text = f"{date}T{clock}"
    if fraction:
        text += "." + fraction[:6].ljust(6, "0")
    text += "+00:00" if zone in ("Z", "z") else zone
    return datetime.fromisoformat(text)


def _check_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _optional_text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string or null")
    return value


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = _optional_int(data, key)
    return 0 if value is None else value


def _optional_flag(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


def _flag(data: Mapping[str, Any], key: str) -> bool:
    return bool(_optional_flag(data, key))


@dataclass
class PlaybackEvent:
    """One entry of the raw streaming history export."""

    timestamp: Optional[datetime] = None
    platform: str = ""
    ms_played: int = 0
    connection_country: str = ""
    ip_address: str = ""
    track_name: Optional[str] = None
    album_artist_name: Optional[str] = None
    album_name: Optional[str] = None
    spotify_track_uri: Optional[str] = None
    episode_name: Optional[str] = None
    episode_show_name: Optional[str] = None
    spotify_episode_uri: Optional[str] = None
    audiobook_title: Optional[str] = None
    audiobook_uri: Optional[str] = None
    audiobook_chapter_uri: Optional[str] = None
    audiobook_chapter_title: Optional[str] = None
    reason_start: str = ""
    reason_end: str = ""
    shuffle: bool = False
    skipped: bool = False
    offline: Optional[bool] = None
    offline_timestamp: Optional[int] = None
    incognito_mode: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlaybackEvent":
        """Build an event from a decoded JSON object; raise ValueError on bad types."""
        data = _check_mapping(data)
        return cls(
            timestamp=_parse_timestamp(data.get("ts")),
            platform=_text(data, "platform"),
            ms_played=_int(data, "ms_played"),
            connection_country=_text(data, "conn_country"),
            ip_address=_text(data, "ip_addr"),
            track_name=_optional_text(data, "master_metadata_track_name"),
            album_artist_name=_optional_text(data, "master_metadata_album_artist_name"),
            album_name=_optional_text(data, "master_metadata_album_album_name"),
            spotify_track_uri=_optional_text(data, "spotify_track_uri"),
            episode_name=_optional_text(data, "episode_name"),
            episode_show_name=_optional_text(data, "episode_show_name"),
            spotify_episode_uri=_optional_text(data, "spotify_episode_uri"),
            audiobook_title=_optional_text(data, "audiobook_title"),
            audiobook_uri=_optional_text(data, "audiobook_uri"),
            audiobook_chapter_uri=_optional_text(data, "audiobook_chapter_uri"),
            audiobook_chapter_title=_optional_text(data, "audiobook_chapter_title"),
            reason_start=_text(data, "reason_start"),
            reason_end=_text(data, "reason_end"),
            shuffle=_flag(data, "shuffle"),
            skipped=_flag(data, "skipped"),
            offline=_optional_flag(data, "offline"),
            offline_timestamp=_optional_int(data, "offline_timestamp"),
            incognito_mode=_flag(data, "incognito_mode"),
        )


@dataclass
class TrackAggregation:
    """Total listening time of one track, keyed elsewhere by its track URI."""

    ms_played: int = 0
    track_name: Optional[str] = None
    album_artist_name: Optional[str] = None
    album_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrackAggregation":
        """Build an aggregation from its JSON object form."""
        data = _check_mapping(data)
        return cls(
            ms_played=_int(data, "ms_played"),
            track_name=_optional_text(data, "track_name"),
            album_artist_name=_optional_text(data, "album_artist_name"),
            album_name=_optional_text(data, "album_name"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {
            "ms_played": self.ms_played,
            "track_name": self.track_name,
            "album_artist_name": self.album_artist_name,
            "album_name": self.album_name,
        }


@dataclass
class ArtistAggregation:
    """Total listening time of one artist."""

    ms_played: int = 0
    artist_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ArtistAggregation":
        """Build an aggregation from its JSON object form."""
        data = _check_mapping(data)
        return cls(
            ms_played=_int(data, "ms_played"),
            artist_name=_optional_text(data, "artist_name"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {"ms_played": self.ms_played, "artist_name": self.artist_name}