"""Aggregate exported Spotify listening history and report on it from the command line."""

__version__ = "0.1.0"