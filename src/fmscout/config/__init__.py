"""Configuration helpers for position categories and scoring weights."""

from .weights import (
    DEFAULT_WEIGHTS,
    POSITION_GROUPS,
    POSITION_LOOKUP,
    WEIGHT_NORMALIZATION,
    ConfigurationError,
    WeightTable,
    build_weight_table,
    category_for_position,
    resolve_position_filter,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "POSITION_GROUPS",
    "POSITION_LOOKUP",
    "WEIGHT_NORMALIZATION",
    "ConfigurationError",
    "WeightTable",
    "build_weight_table",
    "category_for_position",
    "resolve_position_filter",
]
