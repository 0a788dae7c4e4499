"""lastfm-archiver: archive Last.fm listening history into SQLite."""

__version__ = "0.1.0"
