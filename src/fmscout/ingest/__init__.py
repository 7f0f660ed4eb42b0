"""Input adapters that normalize raw roster exports."""

from .records import (
    REQUIRED_COLUMNS,
    FileError,
    LoadedFile,
    ParseResult,
    RowFailure,
    load_players_from_csv,
    load_roster_csv,
    parse_money,
    parse_row,
    parse_rows,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "FileError",
    "LoadedFile",
    "ParseResult",
    "RowFailure",
    "load_players_from_csv",
    "load_roster_csv",
    "parse_money",
    "parse_row",
    "parse_rows",
]
