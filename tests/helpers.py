"""Row and player builders shared by the test modules."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Mapping

from fmscout.config.weights import category_for_position
from fmscout.ingest.records import REQUIRED_COLUMNS
from fmscout.models.player import ATTRIBUTE_NAMES, Player


def make_row(**overrides: object) -> dict[str, str]:
    row: dict[str, str] = {
        "name": "Test Player",
        "age": "20",
        "club": "Test FC",
        "nationality": "ENG",
        "position": "ST",
        "value": "2000000",
        "wage": "5000",
        "current_ability": "110",
        "potential_ability": "150",
    }
    row.update({name: "10" for name in ATTRIBUTE_NAMES})
    row.update({key: str(value) for key, value in overrides.items()})
    return row


def make_player(**overrides: object) -> Player:
    data: dict[str, object] = {
        "name": "Test Player",
        "age": 20,
        "club": "Test FC",
        "nationality": "ENG",
        "position": "ST",
        "value": 2_000_000.0,
        "wage": 5_000.0,
        "current_ability": 110,
        "potential_ability": 150,
    }
    data.update({name: 10 for name in ATTRIBUTE_NAMES})
    data.update(overrides)
    data.setdefault("category", category_for_position(str(data["position"])))
    return Player(**data)


def write_roster(path: Path, rows: Iterable[Mapping[str, str]], *, header: Iterable[str] = REQUIRED_COLUMNS) -> Path:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(header), extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


def scenario_rows() -> list[dict[str, str]]:
    """Three-player roster: a young cheap striker, an older striker, a centre-back."""

    return [
        make_row(name="Player A", position="ST", age=20, value=2_000_000, potential_ability=150,
                 finishing=18),
        make_row(name="Player B", position="ST", age=26, value=1_000_000, potential_ability=160),
        make_row(name="Player C", position="CB", age=19, value=500_000, potential_ability=145),
    ]
