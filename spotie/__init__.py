"""Spotie: browse the Spotify catalog and share playlists by invitation."""

__version__ = "0.1.0"
