"""
Quality Score Calculator

Computes a 0-100 quality score from per-rule evaluation results.
Separated from engine.py for single-responsibility.

Score = 100 minus one penalty per failed rule:
  penalty = rule weight x severity multiplier
  error=0.8, warning=0.5, info=0.2, anything else=0.3

Penalties accumulate linearly. Passed rules earn nothing, and
category weights play no part: they are display emphasis only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Protocol

SEVERITY_MULTIPLIERS = {"error": 0.8, "warning": 0.5, "info": 0.2}
DEFAULT_MULTIPLIER = 0.3


class Scorable(Protocol):
    id: str
    passed: bool
    level: str
    weight: float


@dataclass(frozen=True)
class Grade:
    grade: str
    color: str


# Ordered, first match wins
GRADE_TABLE: tuple[tuple[int, Grade], ...] = (
    (95, Grade("A+", "#10b981")),
    (90, Grade("A", "#10b981")),
    (85, Grade("A-", "#10b981")),
    (80, Grade("B+", "#3b82f6")),
    (75, Grade("B", "#3b82f6")),
    (70, Grade("B-", "#3b82f6")),
    (65, Grade("C+", "#f59e0b")),
    (60, Grade("C", "#f59e0b")),
    (55, Grade("C-", "#f59e0b")),
    (50, Grade("D+", "#ef4444")),
    (45, Grade("D", "#ef4444")),
    (40, Grade("D-", "#ef4444")),
)
FAILING_GRADE = Grade("F", "#dc2626")


def severity_multiplier(level: str) -> float:
    return SEVERITY_MULTIPLIERS.get(level, DEFAULT_MULTIPLIER)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_score(results: Iterable[Scorable]) -> tuple[int, dict]:
    """
    Calculate the quality score from evaluation results.

    Returns:
        (score, breakdown) where breakdown lists every penalty applied.
    """
    breakdown: dict = {
        "starting_score": 100,
        "penalties": [],
        "total_penalty": 0.0,
    }

    lost = 0.0
    for result in results:
        if result.passed:
            continue
        pen = result.weight * severity_multiplier(result.level)
        lost += pen
        breakdown["penalties"].append({
            "rule": result.id,
            "level": result.level,
            "penalty": -pen,
        })

    breakdown["total_penalty"] = -lost
    final = max(0, min(100, _round_half_up(100 - lost)))
    breakdown["final_score"] = final
    return final, breakdown


def get_grade(score: int) -> Grade:
    """Map a score to its letter grade. Depends on the score alone."""
    for threshold, grade in GRADE_TABLE:
        if score >= threshold:
            return grade
    return FAILING_GRADE
