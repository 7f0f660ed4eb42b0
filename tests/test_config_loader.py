import json
from pathlib import Path

import pytest

from fmscout.config import DEFAULT_WEIGHTS, ConfigurationError
from fmscout.config_loader import ScoringProfile
from fmscout.models import PositionCategory
from fmscout.scoring import DEFAULT_ALPHA, DEFAULT_BETA


def test_default_profile_matches_defaults():
    profile = ScoringProfile()

    assert profile.constants().alpha == DEFAULT_ALPHA
    assert profile.constants().beta == DEFAULT_BETA
    assert profile.weight_table() == DEFAULT_WEIGHTS


def test_profile_round_trip(tmp_path: Path):
    path = tmp_path / "profile.json"
    ScoringProfile(
        alpha=1.0,
        beta=0.5,
        weights={"st": {"finishing": 1.0}},
        position_groups={"TARGET": ["ST", "AM"]},
    ).save(path)

    loaded = ScoringProfile.load(path)

    assert loaded.constants().alpha == 1.0
    assert loaded.weight_table().vector(PositionCategory.ST)["finishing"] == 1.0
    assert loaded.resolve_positions("target") == frozenset({PositionCategory.ST, PositionCategory.AM})
    assert loaded.resolve_positions("CB") == frozenset({PositionCategory.CB})


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps([1, 2, 3]),
        json.dumps({"alpha": "big"}),
        '{"alpha": NaN}',
        '{"beta": Infinity}',
        json.dumps({"alpha": -1.0}),
        json.dumps({"weights": {"ST": 3}}),
        json.dumps({"position_groups": {"X": "ST"}}),
    ],
)
def test_invalid_profile_raises(tmp_path: Path, payload):
    path = tmp_path / "profile.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ScoringProfile.load(path)


def test_unknown_category_in_profile(tmp_path: Path):
    profile = ScoringProfile(weights={"QB": {"passing": 1.0}})
    with pytest.raises(ConfigurationError):
        profile.weight_table()


def test_missing_profile_file(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        ScoringProfile.load(tmp_path / "missing.json")


def test_from_runtime_keeps_nonzero_weights():
    profile = ScoringProfile.from_runtime(DEFAULT_WEIGHTS, ScoringProfile().constants())

    assert profile.weights["ST"]["finishing"] == pytest.approx(0.25)
    assert "tackling" not in profile.weights["ST"]
    assert profile.weight_table() == DEFAULT_WEIGHTS
