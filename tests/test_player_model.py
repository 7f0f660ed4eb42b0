import pytest
from pydantic import ValidationError

from fmscout.models import ATTRIBUTE_NAMES, PositionCategory

from tests.helpers import make_player


def test_player_is_frozen():
    player = make_player(name="Test Player")

    assert player.name == "Test Player"
    assert player.category is PositionCategory.ST

    with pytest.raises((TypeError, ValidationError)):
        player.name = "Someone Else"  # type: ignore[misc]


def test_player_rejects_attribute_outside_scale():
    with pytest.raises(ValidationError):
        make_player(pace=21)
    with pytest.raises(ValidationError):
        make_player(pace=0)


def test_player_attributes_cover_every_name():
    player = make_player(finishing=17)

    attributes = player.attributes()
    assert tuple(attributes) == ATTRIBUTE_NAMES
    assert attributes["finishing"] == 17


def test_potential_gap():
    player = make_player(current_ability=100, potential_ability=165)
    assert player.potential_gap == 65


def test_unscored_category_flag():
    assert not PositionCategory.UNSCORED.scoreable
    assert all(category.scoreable for category in PositionCategory if category is not PositionCategory.UNSCORED)
