# weathermap/utils_colors.py
"""Temperature → color classification for region fills."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from weathermap.config import COLOR_PENDING, COLOR_RULES

FALLBACK_LABEL = "Unknown"


@dataclass(frozen=True)
class ColorRule:
    """One threshold rule; the second clause turns it into a band."""

    operator: str
    value: float
    color: str
    label: str
    operator_second: str | None = None
    value_second: float | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ColorRule:
        return cls(
            operator=raw["operator"],
            value=float(raw["value"]),
            color=raw["color"],
            label=raw["label"],
            operator_second=raw.get("operator_second"),
            value_second=(
                float(raw["value_second"]) if raw.get("value_second") is not None else None
            ),
        )

    def matches(self, temperature: float) -> bool:
        if not evaluate_operator(temperature, self.operator, self.value):
            return False
        if self.operator_second is None or self.value_second is None:
            return True
        return evaluate_operator(temperature, self.operator_second, self.value_second)


DEFAULT_RULES: tuple[ColorRule, ...] = tuple(ColorRule.from_dict(r) for r in COLOR_RULES)


def evaluate_operator(value: float, operator: str, threshold: float) -> bool:
    """Compare value against threshold; unknown operators never match."""
    if operator == "<":
        return value < threshold
    if operator == "<=":
        return value <= threshold
    if operator == ">":
        return value > threshold
    if operator == ">=":
        return value >= threshold
    if operator == "=":
        return value == threshold
    return False


def classify_temperature(
    temperature: float,
    rules: Iterable[ColorRule] = DEFAULT_RULES,
    fallback: str = COLOR_PENDING,
) -> tuple[str, str]:
    """Return (color, label) of the first matching rule, in declaration order."""
    for rule in rules:
        if rule.matches(temperature):
            return rule.color, rule.label
    return fallback, FALLBACK_LABEL


def color_for_temperature(
    temperature: float,
    rules: Iterable[ColorRule] = DEFAULT_RULES,
    fallback: str = COLOR_PENDING,
) -> str:
    """Get a single fill color for a temperature."""
    return classify_temperature(temperature, rules, fallback)[0]


def legend(rules: Iterable[ColorRule] = DEFAULT_RULES) -> list[tuple[str, str]]:
    """(color, description) pairs for the map legend, e.g. ('#ff4d4f', 'Cold (< 10°C)')."""
    rows: list[tuple[str, str]] = []
    for rule in rules:
        cond = f"{rule.operator} {rule.value:g}"
        if rule.operator_second is not None and rule.value_second is not None:
            cond += f" and {rule.operator_second} {rule.value_second:g}"
        rows.append((rule.color, f"{rule.label} ({cond}°C)"))
    return rows
