# betterwrapped

This is a small command-line tool for looking through your own Spotify
listening history. It shows your favourite and least favourite tracks and
artists, top lists by listening time, and how many different tracks and
artists you have played.

## Installation

```
pip install .
```

This installs the `bsw` command. To run the tests, install the `test` extra
(`pip install .[test]`) and run `pytest`.

## Getting your data

Request your *Extended streaming history* from Spotify's privacy settings.
The export contains files with names like `Streaming_History_Audio_2023.json`.

Run `bsw` once from the directory you want to work in. It creates a `data`
folder there if one does not exist yet. Copy the `Streaming_History_Audio*.json`
files into that folder.

## Usage

Aggregate the raw history first. You must do this before any other command,
and again whenever you add new files:

```
bsw parse
```

`parse` reads each regular file in `data` whose name contains both `.json` and
`Streaming_History_Audio`. It skips subdirectories and its own output files,
and prints the name of each file it reads. It writes
`aggregated_tracks.json`, keyed by track URI, and `aggregated_artists.json`,
keyed by album artist name, into the `data` folder. If the folder is empty,
`parse` stops with an error.

After that, you can run these commands:

```
bsw favorite track        # the track you listened to the longest
bsw favorite artist       # the artist you listened to the longest
bsw top track 5           # top 5 tracks by listening time (amount 1 to 10)
bsw top artist 10         # top 10 artists by listening time
bsw hate track            # the track with the least non-zero listening time
bsw hate artist           # the artist with the least non-zero listening time
bsw count track           # number of different tracks played
bsw count artist          # number of different artists played
bsw help                  # show usage
```

Commands and their first argument are case-insensitive. An unknown command, or
no command at all, prints the usage message.

Listening times are shown in whole minutes, except for `hate`, which shows
milliseconds.

For `top`, asking for more entries than exist is an error.

Podcast episodes and audiobooks in the export have no track URI, so they are
ignored. Only music tracks are counted.

When an error occurs, `bsw` prints it to standard error and exits with
status 1. Errors include:

- missing or unreadable files
- invalid JSON
- a track event with no artist name
- no data to rank

## Using it from Python

You can import the pieces behind the command:

- `betterwrapped.store.parse_data(data_dir)` aggregates the history files in a
  directory, writes the two aggregated files and returns the track and artist
  dictionaries. `load_tracks(data_dir)` and `load_artists(data_dir)` read the
  written files back. `aggregate_events` adds `PlaybackEvent`s to existing
  totals. Problems are raised as `betterwrapped.store.DataError`.
- `betterwrapped.models` defines:
  - `PlaybackEvent`, `TrackAggregation` and `ArtistAggregation`, each with a
    `from_dict` constructor. The two aggregations also have `to_dict`.
  - The `DATA_DIR` constant and the file name constants.
- `betterwrapped.reports` has:
  - `favorite`, `least_favorite`, `top` and `minutes`.
  - `describe_*` functions that format the results as the text `bsw` prints.
- `betterwrapped.cli.run(args, data_dir)` runs a command with an argument list
  (without the program name) against any data directory.
  `betterwrapped.cli.main()` is the `bsw` entry point.

## What it does not do

`bsw` works only on export files that you have already downloaded. It does
not connect to Spotify or fetch anything itself. The command always uses the
`data` folder in the current directory; to use another directory, call the
Python functions above.