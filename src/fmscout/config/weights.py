"""Position lookup and per-category attribute weights."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from fmscout.models.player import ATTRIBUTE_NAMES, SCOREABLE_CATEGORIES, PositionCategory


WEIGHT_NORMALIZATION = 1.0


class ConfigurationError(ValueError):
    """Raised when scoring or filter configuration cannot be used."""


_DEFAULT_VECTORS: Dict[PositionCategory, Dict[str, float]] = {
    PositionCategory.GK: {
        "decisions": 0.20,
        "anticipation": 0.15,
        "composure": 0.15,
        "jumping": 0.15,
        "strength": 0.10,
        "acceleration": 0.10,
        "first_touch": 0.05,
        "passing": 0.05,
        "vision": 0.05,
    },
    PositionCategory.CB: {
        "tackling": 0.25,
        "strength": 0.15,
        "jumping": 0.15,
        "anticipation": 0.15,
        "decisions": 0.10,
        "composure": 0.10,
        "pace": 0.05,
        "passing": 0.05,
    },
    PositionCategory.FB: {
        "tackling": 0.15,
        "pace": 0.15,
        "acceleration": 0.15,
        "stamina": 0.15,
        "work_rate": 0.10,
        "passing": 0.10,
        "anticipation": 0.10,
        "dribbling": 0.05,
        "decisions": 0.05,
    },
    PositionCategory.DM: {
        "tackling": 0.20,
        "anticipation": 0.15,
        "decisions": 0.15,
        "passing": 0.15,
        "work_rate": 0.10,
        "stamina": 0.10,
        "strength": 0.10,
        "composure": 0.05,
    },
    PositionCategory.CM: {
        "passing": 0.25,
        "vision": 0.15,
        "decisions": 0.15,
        "work_rate": 0.15,
        "stamina": 0.10,
        "first_touch": 0.10,
        "technique": 0.10,
    },
    PositionCategory.WM: {
        "pace": 0.15,
        "acceleration": 0.15,
        "dribbling": 0.15,
        "passing": 0.10,
        "technique": 0.10,
        "stamina": 0.10,
        "work_rate": 0.10,
        "first_touch": 0.05,
        "vision": 0.05,
        "decisions": 0.05,
    },
    PositionCategory.AM: {
        "vision": 0.20,
        "technique": 0.15,
        "passing": 0.15,
        "first_touch": 0.15,
        "dribbling": 0.10,
        "decisions": 0.10,
        "composure": 0.10,
        "finishing": 0.05,
    },
    PositionCategory.ST: {
        "finishing": 0.25,
        "first_touch": 0.15,
        "acceleration": 0.15,
        "pace": 0.15,
        "composure": 0.10,
        "anticipation": 0.10,
        "dribbling": 0.05,
        "strength": 0.05,
    },
}


_POSITION_LABELS: Dict[PositionCategory, tuple[str, ...]] = {
    PositionCategory.GK: ("GK", "G", "GOALKEEPER"),
    PositionCategory.CB: ("CB", "DC", "D(C)", "D"),
    PositionCategory.FB: (
        "FB", "LB", "RB", "DL", "DR", "D(L)", "D(R)", "D(RL)", "D(LR)",
        "WB", "LWB", "RWB", "WBL", "WBR", "WB(L)", "WB(R)", "WB(RL)", "WB(LR)",
    ),
    PositionCategory.DM: ("DM", "DMC", "CDM", "DM(C)"),
    PositionCategory.CM: ("CM", "MC", "M(C)", "M"),
    PositionCategory.WM: (
        "WM", "LM", "RM", "ML", "MR", "M(L)", "M(R)", "M(RL)", "M(LR)",
        "LW", "RW", "AML", "AMR", "AM(L)", "AM(R)", "AM(RL)", "AM(LR)",
    ),
    PositionCategory.AM: ("AM", "AMC", "CAM", "AM(C)"),
    PositionCategory.ST: ("ST", "STC", "ST(C)", "CF", "FC", "F(C)", "F"),
}

POSITION_LOOKUP: Mapping[str, PositionCategory] = MappingProxyType(
    {label: category for category, labels in _POSITION_LABELS.items() for label in labels}
)

_SIDED_LABEL = re.compile(r"^(?P<roles>[A-Z]+(?:/[A-Z]+)*)(?:\((?P<side>[RLC]+)\))?$")


def _position_token(value: str) -> str:
    return re.sub(r"\s+", "", value.upper())


def _side_candidates(role: str, side: str) -> list[str]:
    # Central beats wide when a label covers several sides, e.g. D (RLC).
    candidates = [f"{role}({side})"]
    if "C" in side:
        candidates.append(f"{role}(C)")
    candidates.extend(f"{role}({letter})" for letter in side if letter != "C")
    return candidates


def category_for_position(position: Optional[str]) -> PositionCategory:
    """Map raw position text to its scoring category.

    Multi-position strings such as ``"D (C), DM"`` are classified by their
    first label. Side suffixes covering several sides resolve to the central
    role when ``C`` is among them (``"D (RLC)"`` is a CB), otherwise to the
    wide role. Compound labels like ``"D/WB (R)"`` use the first role with
    the shared side suffix. Anything unrecognised is UNSCORED.
    """

    if not position:
        return PositionCategory.UNSCORED
    primary = _position_token(position.split(",", 1)[0])
    if not primary:
        return PositionCategory.UNSCORED
    if primary in POSITION_LOOKUP:
        return POSITION_LOOKUP[primary]
    match = _SIDED_LABEL.match(primary)
    if match:
        roles = match.group("roles").split("/")
        side = match.group("side")
        candidates = _side_candidates(roles[0], side) if side else []
        if len(roles) > 1:
            candidates.append(roles[0])
        for candidate in candidates:
            if candidate in POSITION_LOOKUP:
                return POSITION_LOOKUP[candidate]
    return PositionCategory.UNSCORED


def _group(*categories: PositionCategory) -> FrozenSet[PositionCategory]:
    return frozenset(categories)


POSITION_GROUPS: Mapping[str, FrozenSet[PositionCategory]] = MappingProxyType(
    {
        **{category.value: _group(category) for category in SCOREABLE_CATEGORIES},
        "DEF": _group(PositionCategory.CB, PositionCategory.FB),
        "D": _group(PositionCategory.CB, PositionCategory.FB),
        "MID": _group(PositionCategory.DM, PositionCategory.CM, PositionCategory.WM, PositionCategory.AM),
        "M": _group(PositionCategory.DM, PositionCategory.CM, PositionCategory.WM, PositionCategory.AM),
        "ATT": _group(PositionCategory.AM, PositionCategory.WM, PositionCategory.ST),
        "FWD": _group(PositionCategory.ST),
        "F": _group(PositionCategory.ST),
    }
)


def resolve_position_filter(
    key: str,
    groups: Optional[Mapping[str, FrozenSet[PositionCategory]]] = None,
) -> FrozenSet[PositionCategory]:
    """Resolve a requested position (category, group or raw label) to categories."""

    groups = POSITION_GROUPS if groups is None else groups
    token = _position_token(key or "")
    if not token:
        raise ConfigurationError("Position filter must not be empty")
    if token in groups:
        return groups[token]
    category = POSITION_LOOKUP.get(token)
    if category is not None:
        return _group(category)
    known = ", ".join(sorted(groups))
    raise ConfigurationError(f"Unknown position {key!r}; expected one of: {known}")


@dataclass(frozen=True)
class WeightTable:
    """Immutable category -> weight vector table used by the scoring engine."""

    vectors: Dict[PositionCategory, Dict[str, float]]

    def vector(self, category: PositionCategory) -> Mapping[str, float]:
        try:
            return MappingProxyType(self.vectors[category])
        except KeyError:
            raise ConfigurationError(f"No weight vector configured for {category.value}") from None

    def categories(self) -> Iterable[PositionCategory]:
        return self.vectors.keys()

    def key_attributes(self, category: PositionCategory, limit: int = 5) -> tuple[str, ...]:
        """Return the highest-weighted attribute names for a category."""

        if category not in self.vectors:
            return ()
        ordered = sorted(
            ((name, weight) for name, weight in self.vectors[category].items() if weight > 0),
            key=lambda item: (-item[1], ATTRIBUTE_NAMES.index(item[0])),
        )
        return tuple(name for name, _ in ordered[:limit])

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            category.value: {name: weight for name, weight in vector.items() if weight}
            for category, vector in self.vectors.items()
        }


def _complete_vector(category: PositionCategory, entry: Mapping[str, object]) -> Dict[str, float]:
    unknown = sorted(set(entry) - set(ATTRIBUTE_NAMES))
    if unknown:
        raise ConfigurationError(
            f"Unknown attribute(s) in {category.value} weights: {', '.join(unknown)}"
        )
    vector: Dict[str, float] = {}
    for name in ATTRIBUTE_NAMES:
        raw = entry.get(name, 0.0)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ConfigurationError(f"Weight {category.value}.{name} must be a number, got {raw!r}")
        weight = float(raw)
        if weight < 0 or not math.isfinite(weight):
            raise ConfigurationError(f"Weight {category.value}.{name} must be non-negative, got {raw!r}")
        vector[name] = weight
    return vector


def build_weight_table(
    overrides: Optional[Mapping[PositionCategory, Mapping[str, object]]] = None,
    *,
    base: Optional[Mapping[PositionCategory, Mapping[str, object]]] = None,
) -> WeightTable:
    """Build and validate a weight table.

    An override replaces the whole vector for its category; attributes it
    does not name get weight 0. Every scoreable category must end up with a
    vector, otherwise :class:`ConfigurationError` is raised.
    """

    entries: Dict[PositionCategory, Mapping[str, object]] = dict(_DEFAULT_VECTORS if base is None else base)
    for category, entry in (overrides or {}).items():
        if not category.scoreable:
            raise ConfigurationError("UNSCORED players cannot carry a weight vector")
        entries[category] = entry

    missing = [category.value for category in SCOREABLE_CATEGORIES if category not in entries]
    if missing:
        raise ConfigurationError(f"Weight table missing categories: {', '.join(missing)}")

    vectors = {
        category: _complete_vector(category, entries[category])
        for category in SCOREABLE_CATEGORIES
    }
    return WeightTable(vectors=vectors)


DEFAULT_WEIGHTS = build_weight_table()
