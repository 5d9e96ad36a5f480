"""
Remediation Preview — Deterministic Fix Diffs

Shows what an auto-fix would change before the host commits it.
The fix itself comes from the engine; this module only describes
the difference between the document before and after.

A span covers one run of text. Spans present in the original carry
"orig_start"/"orig_end", spans present in the fixed text carry
"fixed_start"/"fixed_end", and equal spans carry both. Previews keep
only the changed spans, since the full fixed text travels alongside.
"""

from __future__ import annotations

import diff_match_patch as dmp_module

from mailgrade.engine import RulesEngine

_dmp = dmp_module.diff_match_patch()

_SPAN_TYPES = {
    _dmp.DIFF_EQUAL: ("equal", ("orig", "fixed")),
    _dmp.DIFF_DELETE: ("delete", ("orig",)),
    _dmp.DIFF_INSERT: ("insert", ("fixed",)),
}


def compute_diff_spans(original: str, fixed: str, include_equal: bool = True) -> list[dict]:
    """Diff the document before and after a fix, semantically cleaned up."""
    diffs = _dmp.diff_main(original, fixed)
    _dmp.diff_cleanupSemantic(diffs)

    offsets = {"orig": 0, "fixed": 0}
    spans = []
    for op, text in diffs:
        kind, sides = _SPAN_TYPES[op]
        span = {"type": kind, "text": text}
        for side in sides:
            span[f"{side}_start"] = offsets[side]
            offsets[side] += len(text)
            span[f"{side}_end"] = offsets[side]
        if include_equal or kind != "equal":
            spans.append(span)
    return spans


def preview_fix(engine: RulesEngine, rule_id: str, html: str) -> dict:
    """Run one rule's auto-fix and describe the change without applying it."""
    fixed = engine.apply_auto_fix(rule_id, html)
    changed = fixed != html
    return {
        "rule_id": rule_id,
        "original": html,
        "fixed": fixed,
        "changed": changed,
        "diff_spans": compute_diff_spans(html, fixed, include_equal=False) if changed else [],
    }


def preview_category_fixes(engine: RulesEngine, category: str, html: str) -> dict:
    """Same as preview_fix, for every auto-fix of one category."""
    fixed, fixed_count = engine.apply_all_fixes(category, html)
    return {
        "category": category,
        "original": html,
        "fixed": fixed,
        "fixed_count": fixed_count,
        "diff_spans": compute_diff_spans(html, fixed, include_equal=False) if fixed_count else [],
    }
