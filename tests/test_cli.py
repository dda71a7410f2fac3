import json

import pytest

from betterwrapped import reports
from betterwrapped.cli import help_text, main, parse_amount, run
from betterwrapped.models import AGGREGATED_ARTIST_DATA_FILE, AGGREGATED_TRACK_DATA_FILE, DATA_DIR
from betterwrapped.store import DataError, load_artists, load_tracks


def _event(track, artist, album, uri, ms):
    return {
        "ts": "2024-01-01T10:00:00Z",
        "platform": "linux",
        "ms_played": ms,
        "master_metadata_track_name": track,
        "master_metadata_album_artist_name": artist,
        "master_metadata_album_album_name": album,
        "spotify_track_uri": uri,
    }


@pytest.fixture
def data_dir(tmp_path):
    events = [
        _event("Song A", "Artist X", "Album 1", "spotify:track:a", 180000),
        _event("Song B", "Artist Y", "Album 2", "spotify:track:b", 60000),
        _event("Song A", "Artist X", "Album 1", "spotify:track:a", 120000),
        {"ts": "2024-01-01T11:00:00Z", "ms_played": 5000, "episode_name": "Pod"},
    ]
    (tmp_path / "Streaming_History_Audio_2024.json").write_text(json.dumps(events))
    return tmp_path


@pytest.fixture
def parsed(data_dir, capsys):
    run(["parse"], data_dir)
    capsys.readouterr()
    return data_dir


@pytest.mark.parametrize("text,expected", [("1", 1), ("10", 10), ("7", 7), ("+3", 3)])
def test_parse_amount_valid(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["0", "11", "", "abc", " 5", "1_0", "-1", "2.5"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_no_args_prints_help(capsys):
    run([])
    out = capsys.readouterr().out
    assert out == help_text() + "\n"
    assert out.startswith("Usage: \n bsw [command] [options]")


@pytest.mark.parametrize("args", [["help"], ["HELP"], ["nonsense"]])
def test_help_and_unknown_print_help(args, capsys):
    run(args)
    assert capsys.readouterr().out == help_text() + "\n"


def test_parse_writes_aggregates(data_dir, capsys):
    run(["parse"], data_dir)
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Parsing Spotify data..."
    assert "Parsing file:  Streaming_History_Audio_2024.json" in out
    assert (data_dir / AGGREGATED_TRACK_DATA_FILE).is_file()
    assert (data_dir / AGGREGATED_ARTIST_DATA_FILE).is_file()
    assert set(load_tracks(data_dir)) == {"spotify:track:a", "spotify:track:b"}


def test_favorite_track(parsed, capsys):
    run(["favorite", "track"], parsed)
    out = capsys.readouterr().out
    expected = reports.describe_favorite_track(load_tracks(parsed)["spotify:track:a"])
    assert out == expected + "\n"


def test_favorite_artist_case_insensitive(parsed, capsys):
    run(["FAVORITE", "Artist"], parsed)
    out = capsys.readouterr().out
    assert out == reports.describe_favorite_artist(load_artists(parsed)["Artist X"]) + "\n"


@pytest.mark.parametrize("args", [["favorite"], ["favorite", "album"]])
def test_favorite_usage(args, capsys):
    run(args)
    assert capsys.readouterr().out == "Please specify 'track' or 'artist' as argument.\n"


def test_hate_artist(parsed, capsys):
    run(["hate", "artist"], parsed)
    out = capsys.readouterr().out
    assert out == reports.describe_hated_artist(load_artists(parsed)["Artist Y"]) + "\n"


def test_hate_track(parsed, capsys):
    run(["hate", "track"], parsed)
    out = capsys.readouterr().out
    assert out == reports.describe_hated_track(load_tracks(parsed)["spotify:track:b"]) + "\n"


def test_hate_usage(capsys):
    run(["hate"])
    assert capsys.readouterr().out == "Please specify 'artist' or 'track' as argument.\n"


def test_top_tracks_ordering(parsed, capsys):
    run(["top", "track", "2"], parsed)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Top tracks:"
    assert lines[1].startswith("1. Song A - Album 1 - Artist X")
    assert lines[2].startswith("2. Song B - Album 2 - Artist Y")
    assert len(lines) == 3


def test_top_artists(parsed, capsys):
    run(["top", "artist", "1"], parsed)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Top artists:"
    assert lines[1].startswith("1. Artist X")
    assert len(lines) == 2


def test_top_missing_amount(capsys):
    run(["top", "track"])
    assert capsys.readouterr().out == (
        "Please specify 'track' or 'artist' and an amount as argument.\n"
    )


@pytest.mark.parametrize("amount", ["11", "abc", "0"])
def test_top_invalid_amount(amount, capsys):
    run(["top", "track", amount])
    assert capsys.readouterr().out == (
        "Invalid amount argument, please specify an integer between 1 and 10.\n"
    )


def test_top_bad_kind(capsys):
    run(["top", "album", "3"])
    assert capsys.readouterr().out == "Please specify 'track' or 'artist' as argument.\n"


def test_top_more_than_available(parsed):
    with pytest.raises(ValueError):
        run(["top", "track", "5"], parsed)


def test_count(parsed, capsys):
    run(["count", "track"], parsed)
    run(["count", "artist"], parsed)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        reports.describe_count(2, "tracks"),
        reports.describe_count(2, "artists"),
    ]


def test_count_usage(capsys):
    run(["count", "song"])
    assert capsys.readouterr().out == "Please provide 'artist' or 'track' as an argument.\n"


def test_missing_aggregates_raise(tmp_path):
    with pytest.raises(DataError):
        run(["count", "track"], tmp_path)


def test_favorite_empty_data_raises(tmp_path):
    (tmp_path / AGGREGATED_TRACK_DATA_FILE).write_text("{}")
    with pytest.raises(DataError, match="No favorite track found"):
        run(["favorite", "track"], tmp_path)


def test_main_creates_data_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["help"]) == 0
    assert (tmp_path / DATA_DIR).is_dir()
    assert capsys.readouterr().out == help_text() + "\n"


def test_main_reports_errors(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["parse"]) == 1
    assert "No data found in data directory" in capsys.readouterr().err