"""
mailgrade — Email Template Quality Engine

Scores HTML email templates against a catalogue of compatibility,
accessibility, performance, security and best-practice rules, and
fixes what can be fixed mechanically.

Public API:
  - RulesEngine:       run(), quick fixes, auto-fix application
  - RuleCatalogue:     immutable rule registry (default_catalogue() builds one)
  - Rule, Category:    catalogue data model
  - calculate_score:   penalty score from evaluation results
  - get_grade:         letter grade for a score
  - export_report:     JSON export of a document and its analysis
  - import_report:     parse an exported document
  - preview_fix:       diff of what an auto-fix would change
  - format_markup:     indentation pretty-printer
  - Debouncer:         collapse bursts of analysis triggers

Usage:
    from mailgrade import RulesEngine
    engine = RulesEngine()
    report = engine.run(html)
    html = engine.apply_auto_fix("img-alt", html)
"""

__version__ = "1.0.0"

from mailgrade.rules import (
    Category,
    ComputedMessage,
    Rule,
    StaticMessage,
    CATEGORIES,
    LEVELS,
)
from mailgrade.catalogue import RuleCatalogue, default_catalogue
from mailgrade.scorer import Grade, calculate_score, get_grade, severity_multiplier
from mailgrade.engine import (
    AnalysisReport,
    CategoryScore,
    EvaluationResult,
    QuickFixGroup,
    RulesEngine,
    count_issues,
    filter_results,
    generate_quick_fixes,
)
from mailgrade.remediation import compute_diff_spans, preview_fix, preview_category_fixes
from mailgrade.export import build_export, export_report, import_report
from mailgrade.formatter import format_markup
from mailgrade.debounce import Debouncer

__all__ = [
    "Category",
    "ComputedMessage",
    "Rule",
    "StaticMessage",
    "CATEGORIES",
    "LEVELS",
    "RuleCatalogue",
    "default_catalogue",
    "Grade",
    "calculate_score",
    "get_grade",
    "severity_multiplier",
    "AnalysisReport",
    "CategoryScore",
    "EvaluationResult",
    "QuickFixGroup",
    "RulesEngine",
    "count_issues",
    "filter_results",
    "generate_quick_fixes",
    "compute_diff_spans",
    "preview_fix",
    "preview_category_fixes",
    "build_export",
    "export_report",
    "import_report",
    "format_markup",
    "Debouncer",
]
