"""Balancer configuration and logging setup."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from chembalance.constants import (
    DENOMINATOR_TOLERANCE,
    INTEGER_TOLERANCE,
    MAX_DENOMINATOR,
    ZERO_TOLERANCE,
)

ARITHMETIC_MODES = ("exact", "float")

LOG_LEVEL_ENV = "CHEMBALANCE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class BalancerConfiguration:
    """Numeric settings of the balancer.

    Attributes:
        arithmetic: ``"exact"`` for rational elimination, ``"float"`` for
            floating-point elimination with tolerances.
        zero_tolerance: Magnitude below which a float pivot candidate is zero.
        integer_tolerance: Magnitude below which a float coefficient is zero.
        denominator_tolerance: Allowed distance from an integer during the
            float denominator search.
        max_denominator: Upper bound of the float denominator search.
    """

    arithmetic: str = "exact"
    zero_tolerance: float = ZERO_TOLERANCE
    integer_tolerance: float = INTEGER_TOLERANCE
    denominator_tolerance: float = DENOMINATOR_TOLERANCE
    max_denominator: int = MAX_DENOMINATOR

    def __post_init__(self) -> None:
        if self.arithmetic not in ARITHMETIC_MODES:
            raise ValueError(
                f"Unknown arithmetic {self.arithmetic!r}; expected one of {ARITHMETIC_MODES}."
            )
        if self.zero_tolerance < 0 or self.integer_tolerance < 0:
            raise ValueError("Tolerances must be non-negative.")
        if not 0 < self.denominator_tolerance < 0.5:
            raise ValueError("denominator_tolerance must lie in (0, 0.5).")
        if self.max_denominator < 1:
            raise ValueError("max_denominator must be at least 1.")

    @property
    def exact(self) -> bool:
        return self.arithmetic == "exact"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BalancerConfiguration:
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key == "arithmetic":
                values[key] = str(value).lower()
            elif key == "max_denominator":
                values[key] = int(value)
            else:
                values[key] = float(value)
        return cls(**values)


def load_configuration(config_file: str | Path) -> BalancerConfiguration:
    """Read a JSON object of configuration values."""
    with open(config_file, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a JSON object.")
    return BalancerConfiguration.from_mapping(data)


def configure_logging(level: int | str | None = None) -> None:
    """Configure the root logger (call once on program start)."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
