import pytest

from fmscout.config import (
    DEFAULT_WEIGHTS,
    WEIGHT_NORMALIZATION,
    ConfigurationError,
    WeightTable,
    build_weight_table,
    category_for_position,
    resolve_position_filter,
)
from fmscout.models import ATTRIBUTE_NAMES, SCOREABLE_CATEGORIES, PositionCategory


def test_default_table_covers_every_scoreable_category():
    for category in SCOREABLE_CATEGORIES:
        vector = DEFAULT_WEIGHTS.vector(category)
        assert set(vector) == set(ATTRIBUTE_NAMES)
        assert all(weight >= 0 for weight in vector.values())
        assert sum(vector.values()) == pytest.approx(WEIGHT_NORMALIZATION)


def test_vector_is_read_only():
    vector = DEFAULT_WEIGHTS.vector(PositionCategory.ST)
    with pytest.raises(TypeError):
        vector["finishing"] = 5.0  # type: ignore[index]


def test_missing_vector_lookup_raises():
    table = WeightTable(vectors={})
    with pytest.raises(ConfigurationError):
        table.vector(PositionCategory.CB)


def test_build_weight_table_rejects_incomplete_base():
    with pytest.raises(ConfigurationError, match="missing categories"):
        build_weight_table(base={PositionCategory.ST: {"finishing": 1.0}})


@pytest.mark.parametrize(
    "weights",
    [
        {"finishing": -0.5},
        {"shooting": 1.0},
        {"finishing": "heavy"},
    ],
)
def test_build_weight_table_rejects_bad_weights(weights):
    with pytest.raises(ConfigurationError):
        build_weight_table({PositionCategory.ST: weights})


def test_override_fills_unnamed_attributes_with_zero():
    table = build_weight_table({PositionCategory.ST: {"finishing": 3.0}})
    vector = table.vector(PositionCategory.ST)
    assert vector["finishing"] == 3.0
    assert vector["pace"] == 0.0
    assert table.vector(PositionCategory.CB) == DEFAULT_WEIGHTS.vector(PositionCategory.CB)


def test_override_for_unscored_is_rejected():
    with pytest.raises(ConfigurationError):
        build_weight_table({PositionCategory.UNSCORED: {"finishing": 1.0}})


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ST", PositionCategory.ST),
        ("st (c)", PositionCategory.ST),
        ("D (C)", PositionCategory.CB),
        ("D (C), DM", PositionCategory.CB),
        ("WB (L)", PositionCategory.FB),
        ("D/WB (R)", PositionCategory.FB),
        ("AM (RL)", PositionCategory.WM),
        ("AM (C)", PositionCategory.AM),
        ("M (C)", PositionCategory.CM),
        ("D (LC)", PositionCategory.CB),
        ("D (RC)", PositionCategory.CB),
        ("D (RLC)", PositionCategory.CB),
        ("D/WB (RC)", PositionCategory.CB),
        ("M (LC)", PositionCategory.CM),
        ("AM (RLC)", PositionCategory.AM),
        ("WB (RLC)", PositionCategory.FB),
        ("DM", PositionCategory.DM),
        ("GK", PositionCategory.GK),
        ("Sweeper Keeper", PositionCategory.UNSCORED),
        ("", PositionCategory.UNSCORED),
        (None, PositionCategory.UNSCORED),
    ],
)
def test_category_for_position(raw, expected):
    assert category_for_position(raw) is expected


def test_resolve_position_filter_groups_and_labels():
    assert resolve_position_filter("st") == frozenset({PositionCategory.ST})
    assert resolve_position_filter("DEF") == frozenset({PositionCategory.CB, PositionCategory.FB})
    assert resolve_position_filter("CF") == frozenset({PositionCategory.ST})
    assert PositionCategory.WM in resolve_position_filter("ATT")


@pytest.mark.parametrize("key", ["", "UNSCORED", "QB"])
def test_resolve_position_filter_rejects_unknown(key):
    with pytest.raises(ConfigurationError):
        resolve_position_filter(key)


def test_key_attributes_follow_weight_order():
    assert DEFAULT_WEIGHTS.key_attributes(PositionCategory.ST) == (
        "finishing",
        "first_touch",
        "acceleration",
        "pace",
        "anticipation",
    )
    assert DEFAULT_WEIGHTS.key_attributes(PositionCategory.UNSCORED) == ()
