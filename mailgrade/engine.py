"""
Rules Engine — Analysis Orchestrator

Runs a rule catalogue against an email document and folds the
outcomes into a report:
  1. Evaluate every rule in catalogue order
  2. Resolve messages into evaluation results
  3. Score the failures (scorer.py)
  4. Break results down by category
  5. Derive quick-fix groups for batch remediation

The engine keeps no report state. Every run() is a pure function
of (catalogue, document) apart from its timing measurement, so a
single engine can serve concurrent callers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from mailgrade.catalogue import RuleCatalogue, default_catalogue
from mailgrade.rules import Category, Rule
from mailgrade.scorer import Grade, calculate_score, get_grade

logger = logging.getLogger(__name__)

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
RESULT_FILTERS = ("all", "passed", "error", "warning", "info")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one rule on one document."""
    id: str
    passed: bool
    message: str
    level: str
    weight: float
    category: str
    fix: Optional[str]
    has_auto_fix: bool


@dataclass
class CategoryScore:
    passed: int
    total: int
    weight: int

    @property
    def percentage(self) -> int:
        """Pass ratio as a whole percentage. Empty categories read 100."""
        if self.total == 0:
            return 100
        return int(self.passed / self.total * 100 + 0.5)


@dataclass
class AnalysisReport:
    """Result of one full pass over the catalogue."""
    score: int
    passed_count: int
    total_checks: int
    results: list[EvaluationResult]
    category_scores: dict[str, CategoryScore]
    analysis_time: float           # milliseconds
    score_breakdown: dict = field(default_factory=dict)

    @property
    def grade(self) -> Grade:
        return get_grade(self.score)

    @property
    def is_empty(self) -> bool:
        return self.total_checks == 0

    @classmethod
    def empty(cls) -> "AnalysisReport":
        """The reset state reported for blank documents."""
        return cls(
            score=0,
            passed_count=0,
            total_checks=0,
            results=[],
            category_scores={},
            analysis_time=0.0,
        )


@dataclass
class QuickFixGroup:
    """Failing results of one category, ranked for remediation."""
    category: str
    issues: list[EvaluationResult]
    priority: str                  # "high", "medium", "low"

    @property
    def fixable(self) -> bool:
        return any(issue.has_auto_fix for issue in self.issues)


# ============================================================
# DERIVED VIEWS
# ============================================================

def category_breakdown(
    results: Iterable[EvaluationResult],
    categories: Mapping[str, Category],
) -> dict[str, CategoryScore]:
    """Count evaluated and passed rules per category, carrying the display weight."""
    scores = {
        cid: CategoryScore(passed=0, total=0, weight=category.weight)
        for cid, category in categories.items()
    }
    for result in results:
        entry = scores.get(result.category)
        if entry is None:
            continue
        entry.total += 1
        if result.passed:
            entry.passed += 1
    return scores


def generate_quick_fixes(results: Iterable[EvaluationResult]) -> list[QuickFixGroup]:
    """
    Group failed results by category and rank the groups.

    A group is "high" priority if it holds any error, "medium" if it
    holds any warning, otherwise "low". Groups keep the order in which
    their category was first seen within each priority.
    """
    grouped: dict[str, list[EvaluationResult]] = {}
    for result in results:
        if not result.passed:
            grouped.setdefault(result.category, []).append(result)

    groups = []
    for category, issues in grouped.items():
        levels = {issue.level for issue in issues}
        if "error" in levels:
            priority = "high"
        elif "warning" in levels:
            priority = "medium"
        else:
            priority = "low"
        groups.append(QuickFixGroup(category=category, issues=issues, priority=priority))

    return sorted(groups, key=lambda g: PRIORITY_ORDER[g.priority])


def count_issues(results: Iterable[EvaluationResult]) -> dict[str, int]:
    """Failed errors, warnings and infos, plus the number passed."""
    counts = {"error": 0, "warning": 0, "info": 0, "passed": 0}
    for result in results:
        if result.passed:
            counts["passed"] += 1
        elif result.level in counts:
            counts[result.level] += 1
    return counts


def filter_results(
    results: Iterable[EvaluationResult], level: str = "all",
) -> list[EvaluationResult]:
    """
    Narrow results for an issue list.

    "all" keeps every failure, "passed" keeps passes, and a severity
    keeps the failures of that severity.
    """
    if level not in RESULT_FILTERS:
        raise ValueError(f"Unknown filter {level!r}; expected one of {RESULT_FILTERS}")
    if level == "all":
        return [r for r in results if not r.passed]
    if level == "passed":
        return [r for r in results if r.passed]
    return [r for r in results if not r.passed and r.level == level]


# ============================================================
# ENGINE
# ============================================================

class RulesEngine:
    """Evaluates documents against an injected rule catalogue."""

    def __init__(self, catalogue: Optional[RuleCatalogue] = None):
        self._catalogue = catalogue if catalogue is not None else default_catalogue()

    @property
    def catalogue(self) -> RuleCatalogue:
        return self._catalogue

    # --- Catalogue introspection ---

    def get_all_rules(self) -> tuple[Rule, ...]:
        return self._catalogue.get_all_rules()

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        return self._catalogue.get_rule(rule_id)

    def get_categories(self) -> Mapping[str, Category]:
        return self._catalogue.get_categories()

    # --- Analysis ---

    def run(self, html: str) -> AnalysisReport:
        """
        Analyze a document against every rule.

        Blank documents short-circuit to the empty report without
        evaluating anything. A rule whose predicate raises is logged
        and left out of the results; the rest of the pass proceeds.
        """
        if not html or not html.strip():
            return AnalysisReport.empty()

        start = time.perf_counter()
        rules = self._catalogue.get_all_rules()
        results: list[EvaluationResult] = []
        passed_count = 0

        for rule in rules:
            try:
                passed = bool(rule.test(html))
                message = rule.message.resolve(passed, html)
            except Exception as e:
                logger.error(
                    "Error running rule %s: %s", rule.id, e,
                    exc_info=True,
                    extra={"rule_id": rule.id, "error_type": type(e).__name__},
                )
                continue

            if passed:
                passed_count += 1
            results.append(EvaluationResult(
                id=rule.id,
                passed=passed,
                message=message,
                level=rule.level,
                weight=rule.weight,
                category=rule.category,
                fix=rule.fix,
                has_auto_fix=rule.has_auto_fix,
            ))

        score, breakdown = calculate_score(results)
        category_scores = category_breakdown(results, self._catalogue.get_categories())
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Analysis complete",
            extra={
                "score": score,
                "rules_evaluated": len(results),
                "duration_ms": round(elapsed_ms, 3),
            },
        )

        return AnalysisReport(
            score=score,
            passed_count=passed_count,
            total_checks=len(rules),
            results=results,
            category_scores=category_scores,
            analysis_time=elapsed_ms,
            score_breakdown=breakdown,
        )

    def generate_quick_fixes(
        self, results: Iterable[EvaluationResult],
    ) -> list[QuickFixGroup]:
        return generate_quick_fixes(results)

    # --- Remediation ---

    def apply_auto_fix(self, rule_id: str, html: str) -> str:
        """
        Apply one rule's auto-fix. Unknown ids and rules without an
        auto-fix leave the document unchanged. Does not re-run analysis.
        """
        rule = self._catalogue.get_rule(rule_id)
        if rule is None or not rule.has_auto_fix:
            return html
        return _safe_remediate(rule, html)

    def apply_all_fixes(self, category: str, html: str) -> tuple[str, int]:
        """
        Fold the document through every auto-fix of a category.

        Fixes run in catalogue order, each on the previous one's output.
        Only fixes whose output differs from their input are counted.
        """
        current = html
        fixed_count = 0
        for rule in self._catalogue.rules_in(category):
            if not rule.has_auto_fix:
                continue
            updated = _safe_remediate(rule, current)
            if updated != current:
                current = updated
                fixed_count += 1

        if fixed_count:
            logger.info(
                "Applied %d fixes for %s", fixed_count, category,
                extra={"category": category, "fixed_count": fixed_count},
            )
        return current, fixed_count


def _safe_remediate(rule: Rule, html: str) -> str:
    try:
        return rule.remediate(html)
    except Exception as e:
        logger.error(
            "Auto-fix for rule %s failed: %s", rule.id, e,
            exc_info=True,
            extra={"rule_id": rule.id, "error_type": type(e).__name__},
        )
        return html
