"""Persist and load scoring profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Mapping

from fmscout.config.weights import (
    POSITION_GROUPS,
    ConfigurationError,
    WeightTable,
    build_weight_table,
    resolve_position_filter,
)
from fmscout.models.player import PositionCategory
from fmscout.scoring.engine import DEFAULT_ALPHA, DEFAULT_BETA, ScoringConstants


def _category(name: str) -> PositionCategory:
    try:
        category = PositionCategory(str(name).strip().upper())
    except ValueError:
        raise ConfigurationError(f"Unknown position category {name!r}") from None
    if not category.scoreable:
        raise ConfigurationError("UNSCORED cannot be used in a scoring profile")
    return category


@dataclass
class ScoringProfile:
    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA
    weights: Dict[str, Dict[str, float]] = field(default_factory=dict)
    position_groups: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ScoringProfile":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"Unable to read scoring profile {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Scoring profile {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Scoring profile {path} must contain a JSON object")
        try:
            alpha = float(data.get("alpha", DEFAULT_ALPHA))
            beta = float(data.get("beta", DEFAULT_BETA))
        except (TypeError, ValueError):
            raise ConfigurationError("Scoring profile alpha/beta must be numbers") from None
        ScoringConstants(alpha=alpha, beta=beta)
        weights = data.get("weights", {})
        groups = data.get("position_groups", {})
        if not isinstance(weights, dict) or not all(isinstance(v, dict) for v in weights.values()):
            raise ConfigurationError("Scoring profile 'weights' must map categories to objects")
        if not isinstance(groups, dict) or not all(isinstance(v, list) for v in groups.values()):
            raise ConfigurationError("Scoring profile 'position_groups' must map keys to lists")
        return cls(alpha=alpha, beta=beta, weights=weights, position_groups=groups)

    def save(self, path: Path) -> None:
        payload = {
            "alpha": self.alpha,
            "beta": self.beta,
            "weights": self.weights,
            "position_groups": self.position_groups,
        }
        Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def constants(self) -> ScoringConstants:
        return ScoringConstants(alpha=self.alpha, beta=self.beta)

    def weight_table(self) -> WeightTable:
        overrides = {_category(name): vector for name, vector in self.weights.items()}
        return build_weight_table(overrides)

    def groups(self) -> Mapping[str, FrozenSet[PositionCategory]]:
        merged: Dict[str, FrozenSet[PositionCategory]] = dict(POSITION_GROUPS)
        for key, names in self.position_groups.items():
            merged[key.strip().upper().replace(" ", "")] = frozenset(_category(name) for name in names)
        return merged

    def resolve_positions(self, key: str) -> FrozenSet[PositionCategory]:
        return resolve_position_filter(key, self.groups())

    @classmethod
    def from_runtime(
        cls,
        weights: WeightTable,
        constants: ScoringConstants,
        position_groups: Mapping[str, List[str]] | None = None,
    ) -> "ScoringProfile":
        return cls(
            alpha=constants.alpha,
            beta=constants.beta,
            weights=weights.as_dict(),
            position_groups=dict(position_groups or {}),
        )
