from pathlib import Path

import pytest

from fmscout.ingest import (
    FileError,
    RowFailure,
    load_players_from_csv,
    load_roster_csv,
    parse_money,
    parse_row,
    parse_rows,
)
from fmscout.models import Player, PositionCategory

from tests.helpers import make_row, write_roster


def test_parse_row_builds_player():
    player = parse_row(make_row(name="  Jude  ", position="M (C)", finishing="14"), row_index=1)

    assert isinstance(player, Player)
    assert player.name == "Jude"
    assert player.category is PositionCategory.CM
    assert player.finishing == 14
    assert player.value == pytest.approx(2_000_000)


def test_parse_row_unknown_position_is_unscored_not_error():
    player = parse_row(make_row(position="Libero"), row_index=1)

    assert isinstance(player, Player)
    assert player.category is PositionCategory.UNSCORED


def test_parse_row_missing_field_is_malformed():
    row = make_row()
    del row["pace"]

    failure = parse_row(row, row_index=3)

    assert isinstance(failure, RowFailure)
    assert failure.kind == "MalformedRow"
    assert failure.field == "pace"
    assert failure.row_index == 3


@pytest.mark.parametrize(
    "field, raw",
    [
        ("age", "twenty"),
        ("age", ""),
        ("age", "-1"),
        ("value", "lots"),
        ("potential_ability", "1.5"),
        ("dribbling", "ten"),
        ("name", "   "),
    ],
)
def test_parse_row_bad_values_are_malformed(field, raw):
    failure = parse_row(make_row(**{field: raw}), row_index=1)

    assert isinstance(failure, RowFailure)
    assert failure.kind == "MalformedRow"
    assert failure.field == field


@pytest.mark.parametrize("raw", ["0", "21", "99"])
def test_parse_row_attribute_out_of_range(raw):
    failure = parse_row(make_row(jumping=raw), row_index=1)

    assert isinstance(failure, RowFailure)
    assert failure.kind == "OutOfRangeAttribute"
    assert failure.field == "jumping"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2500000", 2_500_000),
        ("2,500,000", 2_500_000),
        ("€2.5M", 2_500_000),
        ("£975K", 975_000),
        ("$ 1.2 m", 1_200_000),
    ],
)
def test_parse_money(raw, expected):
    assert parse_money(raw) == pytest.approx(expected)


def test_parse_money_rejects_text():
    with pytest.raises(ValueError):
        parse_money("Not for sale")


def test_parse_rows_collects_failures_and_continues():
    rows = [
        make_row(name="Good One"),
        make_row(name="Too Fast", pace="25"),
        make_row(name="Good Two"),
        make_row(name="No Age", age=""),
    ]

    result = parse_rows(rows)

    assert [p.name for p in result.players] == ["Good One", "Good Two"]
    assert [(f.row_index, f.kind) for f in result.failures] == [
        (2, "OutOfRangeAttribute"),
        (4, "MalformedRow"),
    ]
    assert result.rows_read == 4
    assert result.rows_rejected == 2


def test_load_roster_csv_normalizes_headers(tmp_path: Path):
    row = make_row(name="Header Case")
    header = [name.replace("_", " ").title() for name in row]
    path = tmp_path / "roster.csv"
    path.write_text(
        ",".join(header) + "\n" + ",".join(row.values()) + "\n",
        encoding="utf-8",
    )

    result = load_players_from_csv(path)

    assert not result.failures
    assert result.players[0].name == "Header Case"
    assert result.players[0].first_touch == 10


def test_load_roster_csv_short_row_is_rejected(tmp_path: Path):
    path = write_roster(tmp_path / "roster.csv", [make_row(name="Complete")])
    with path.open("a", encoding="utf-8") as f:
        f.write("Truncated,20,Test FC\n")

    result = load_players_from_csv(path)

    assert [p.name for p in result.players] == ["Complete"]
    assert result.failures[0].kind == "MalformedRow"
    assert result.failures[0].row_index == 2


def test_load_roster_csv_missing_file(tmp_path: Path):
    with pytest.raises(FileError, match="not found"):
        load_roster_csv(tmp_path / "missing.csv")


def test_load_roster_csv_directory(tmp_path: Path):
    with pytest.raises(FileError):
        load_roster_csv(tmp_path)


def test_load_roster_csv_zero_byte_file_is_empty_not_error(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    loaded = load_roster_csv(path)

    assert loaded.empty
    assert loaded.rows == []


def test_load_roster_csv_header_only(tmp_path: Path):
    path = write_roster(tmp_path / "roster.csv", [])

    loaded = load_roster_csv(path)

    assert not loaded.empty
    assert loaded.rows == []
    assert parse_rows(loaded.rows).rows_read == 0
