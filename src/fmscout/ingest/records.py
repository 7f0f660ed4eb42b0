"""Helpers to load roster exports and emit canonical player records."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from fmscout.config.weights import category_for_position
from fmscout.models.player import ATTRIBUTE_MAX, ATTRIBUTE_MIN, ATTRIBUTE_NAMES, Player


logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "club", "nationality", "position")
INTEGER_FIELDS = ("age", "current_ability", "potential_ability")
MONEY_FIELDS = ("value", "wage")
REQUIRED_COLUMNS = ("name", "age", "club", "nationality", "position", "value", "wage",
                    "current_ability", "potential_ability", *ATTRIBUTE_NAMES)

FailureKind = Literal["MalformedRow", "OutOfRangeAttribute"]

_MONEY_SUFFIXES = {"K": 1_000.0, "M": 1_000_000.0, "B": 1_000_000_000.0}
_MONEY_PATTERN = re.compile(r"^(?P<number>\d+(?:\.\d+)?)(?P<suffix>[KMB])?$")


class FileError(RuntimeError):
    """Raised when the input file is missing or cannot be read."""


@dataclass(frozen=True)
class RowFailure:
    """A data row that could not be turned into a Player."""

    row_index: int
    kind: FailureKind
    field: Optional[str]
    message: str
    raw_value: Optional[str] = None

    def describe(self) -> str:
        return f"row {self.row_index}: {self.kind} - {self.message}"


@dataclass(frozen=True)
class ParseResult:
    """Successfully parsed players alongside per-row failures."""

    players: List[Player] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)
    rows_read: int = 0

    @property
    def rows_rejected(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class LoadedFile:
    """Raw rows read from disk, header normalized."""

    path: Path
    header: tuple[str, ...]
    rows: List[dict[str, Optional[str]]]

    @property
    def empty(self) -> bool:
        return not self.header


class _RowError(Exception):
    def __init__(self, kind: FailureKind, field_name: Optional[str], message: str, raw: Optional[str]):
        super().__init__(message)
        self.kind = kind
        self.field_name = field_name
        self.raw = raw


def normalize_header(name: str) -> str:
    """Fold a column label such as ``"First Touch"`` to ``first_touch``."""

    return re.sub(r"[\s\-]+", "_", name.strip().lower())


def _require(row: Mapping[str, Optional[str]], name: str) -> str:
    raw = row.get(name)
    if raw is None:
        raise _RowError("MalformedRow", name, f"missing field '{name}'", None)
    text = raw.strip()
    if not text:
        raise _RowError("MalformedRow", name, f"empty field '{name}'", raw)
    return text


def _parse_int(row: Mapping[str, Optional[str]], name: str) -> int:
    text = _require(row, name)
    try:
        value = int(text)
    except ValueError:
        raise _RowError("MalformedRow", name, f"'{name}' value {text!r} is not an integer", text) from None
    if value < 0:
        raise _RowError("MalformedRow", name, f"'{name}' must be non-negative, got {value}", text)
    return value


def parse_money(raw: str) -> float:
    """Parse ``2500000``, ``2,500,000``, ``€2.5M`` or ``£975K`` into currency units."""

    text = re.sub(r"[€£$,\s]", "", raw).upper()
    match = _MONEY_PATTERN.match(text)
    if not match:
        raise ValueError(f"money value {raw!r} is not numeric")
    amount = float(match.group("number"))
    suffix = match.group("suffix")
    if suffix:
        amount *= _MONEY_SUFFIXES[suffix]
    return amount


def _parse_money_field(row: Mapping[str, Optional[str]], name: str) -> float:
    text = _require(row, name)
    try:
        return parse_money(text)
    except ValueError as exc:
        raise _RowError("MalformedRow", name, f"'{name}' {exc}", text) from None


def _parse_attribute(row: Mapping[str, Optional[str]], name: str) -> int:
    text = _require(row, name)
    try:
        value = int(text)
    except ValueError:
        raise _RowError("MalformedRow", name, f"attribute '{name}' value {text!r} is not an integer", text) from None
    if not ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX:
        raise _RowError(
            "OutOfRangeAttribute",
            name,
            f"attribute '{name}'={value} outside [{ATTRIBUTE_MIN}, {ATTRIBUTE_MAX}]",
            text,
        )
    return value


def parse_row(row: Mapping[str, Optional[str]], *, row_index: int) -> Union[Player, RowFailure]:
    """Convert one header-keyed row into a Player, or describe why it failed."""

    try:
        data: dict[str, object] = {name: _require(row, name) for name in TEXT_FIELDS}
        for name in INTEGER_FIELDS:
            data[name] = _parse_int(row, name)
        for name in MONEY_FIELDS:
            data[name] = _parse_money_field(row, name)
        for name in ATTRIBUTE_NAMES:
            data[name] = _parse_attribute(row, name)
    except _RowError as exc:
        return RowFailure(
            row_index=row_index,
            kind=exc.kind,
            field=exc.field_name,
            message=str(exc),
            raw_value=exc.raw,
        )

    data["category"] = category_for_position(str(data["position"]))
    try:
        return Player(**data)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or (None,)
        field_name = str(loc[0]) if loc[0] is not None else None
        return RowFailure(
            row_index=row_index,
            kind="MalformedRow",
            field=field_name,
            message=f"'{field_name}' {first.get('msg', 'is invalid')}",
        )


def parse_rows(rows: Iterable[Mapping[str, Optional[str]]]) -> ParseResult:
    """Parse rows independently, collecting failures instead of stopping."""

    players: List[Player] = []
    failures: List[RowFailure] = []
    rows_read = 0
    for rows_read, row in enumerate(rows, start=1):
        outcome = parse_row(row, row_index=rows_read)
        if isinstance(outcome, RowFailure):
            logger.warning("Rejected %s", outcome.describe())
            logger.debug("Rejected row %s raw value: %r", outcome.row_index, outcome.raw_value)
            failures.append(outcome)
        else:
            players.append(outcome)
    logger.info(
        "Parsed %s/%s rows (%s rejected)", len(players), rows_read, len(failures)
    )
    return ParseResult(players=players, failures=failures, rows_read=rows_read)


def load_roster_csv(path: Path) -> LoadedFile:
    """Read a roster export. Missing or unreadable files raise FileError.

    A zero-byte file or one with only a header row is not an error; it
    simply yields no rows.
    """

    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            fieldnames: Sequence[str] = reader.fieldnames or ()
            header = tuple(normalize_header(name) for name in fieldnames)
            rows = [
                {
                    normalize_header(key): value
                    for key, value in raw.items()
                    if key is not None
                }
                for raw in reader
            ]
    except FileNotFoundError as exc:
        raise FileError(f"File not found: {path}") from exc
    except IsADirectoryError as exc:
        raise FileError(f"Expected a file but found a directory: {path}") from exc
    except PermissionError as exc:
        raise FileError(f"Permission denied reading {path}") from exc
    except UnicodeDecodeError as exc:
        raise FileError(f"File is not valid UTF-8 text: {path}") from exc
    except (OSError, csv.Error) as exc:
        raise FileError(f"Unable to read {path}: {exc}") from exc

    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if header and missing:
        logger.warning("Input %s is missing columns: %s", path, ", ".join(missing))
    logger.info("Loaded %s data rows from %s", len(rows), path)
    return LoadedFile(path=path, header=header, rows=rows)


def load_players_from_csv(path: Path) -> ParseResult:
    return parse_rows(load_roster_csv(path).rows)
