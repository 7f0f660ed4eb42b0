"""Scouting tool that ranks promising players from a roster export."""

__version__ = "0.1.0"
