"""
Remediation Tests — auto-fix contract and fix previews

Covers:
  1. Single-rule fixes (apply_auto_fix)
  2. Idempotence of every auto-fix
  3. Category fixes (apply_all_fixes) and their change counting
  4. Diff spans and fix previews
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from mailgrade.catalogue import RuleCatalogue, default_catalogue
from mailgrade.engine import RulesEngine
from mailgrade.remediation import compute_diff_spans, preview_category_fixes, preview_fix
from mailgrade.rules import CATEGORIES, Rule, StaticMessage

from tests.documents import BAD_HTML, GOOD_HTML


AUTO_FIX_RULES = [r.id for r in default_catalogue().get_all_rules() if r.has_auto_fix]


@pytest.fixture
def engine():
    return RulesEngine(default_catalogue())


def passes(engine, rule_id, html):
    return engine.get_rule(rule_id).test(html)


# ============================================================
# SINGLE FIXES
# ============================================================

class TestApplyAutoFix:

    def test_unknown_rule_is_a_no_op(self, engine):
        assert engine.apply_auto_fix("no-such-rule", BAD_HTML) == BAD_HTML

    def test_rule_without_auto_fix_is_a_no_op(self):
        rule = Rule(
            id="manual", category="compatibility", weight=5, level="info",
            description="manual", test=lambda html: False, message=StaticMessage("x"),
        )
        engine = RulesEngine(RuleCatalogue([rule], CATEGORIES))
        assert engine.apply_auto_fix("manual", "<p>x</p>") == "<p>x</p>"

    def test_script_removed_and_text_kept(self, engine):
        html = "<p>Hello</p><script>alert(1)</script><p>World</p>"
        assert not passes(engine, "no-forbidden-tags", html)
        fixed = engine.apply_auto_fix("no-forbidden-tags", html)
        assert fixed == "<p>Hello</p><p>World</p>"
        assert passes(engine, "no-forbidden-tags", fixed)

    def test_all_forbidden_elements_removed(self, engine):
        html = (
            "<p>Keep</p>"
            '<form action="/x"><input type="text"><button>Go</button></form>'
            '<iframe src="https://x.com"></iframe>'
            '<embed src="a.swf">'
            "<VIDEO><source src='a.mp4'></VIDEO>"
            "<p>Also keep</p>"
        )
        fixed = engine.apply_auto_fix("no-forbidden-tags", html)
        assert fixed == "<p>Keep</p><p>Also keep</p>"

    def test_unclosed_forbidden_tag_removed(self, engine):
        fixed = engine.apply_auto_fix("no-forbidden-tags", "<p>a</p><script src='x.js'><p>b</p>")
        assert fixed == "<p>a</p><p>b</p>"

    def test_fix_does_not_rerun_analysis(self, engine):
        fixed = engine.apply_auto_fix("doctype-required", "<p>x</p>")
        assert isinstance(fixed, str)
        assert fixed == "<!DOCTYPE html>\n<p>x</p>"

    def test_img_alt_added(self, engine):
        fixed = engine.apply_auto_fix("img-alt", '<img src="a.png"><img src="b.png" />')
        assert fixed == '<img src="a.png" alt="Image"><img src="b.png" alt="Image" />'

    def test_img_dimensions_only_missing_ones(self, engine):
        fixed = engine.apply_auto_fix("img-dimensions", '<img src="a.png" width="300">')
        assert fixed == '<img src="a.png" width="300" height="auto">'

    def test_font_units(self, engine):
        fixed = engine.apply_auto_fix("font-size-units", '<p style="font-size: 1.5em;">x</p>')
        assert fixed == '<p style="font-size: 1.5px;">x</p>'

    def test_secure_images(self, engine):
        fixed = engine.apply_auto_fix("secure-images", '<img src="http://x.com/a.png">')
        assert fixed == '<img src="https://x.com/a.png">'

    def test_viewport_goes_into_head(self, engine):
        fixed = engine.apply_auto_fix("viewport-meta", "<html><head><title>x</title></head></html>")
        assert fixed.startswith('<html><head>\n  <meta name="viewport"')

    def test_short_fragment_is_not_wrapped_in_table(self, engine):
        assert engine.apply_auto_fix("table-layout", "<p>short</p>") == "<p>short</p>"

    def test_raising_auto_fix_leaves_text_unchanged(self, caplog):
        def explode(html):
            raise RuntimeError("bad fix")

        rule = Rule(
            id="explosive", category="security", weight=5, level="error",
            description="explosive", test=lambda html: False,
            message=StaticMessage("x"), auto_fix=explode,
        )
        engine = RulesEngine(RuleCatalogue([rule], CATEGORIES))
        assert engine.apply_auto_fix("explosive", "<p>x</p>") == "<p>x</p>"
        assert engine.apply_all_fixes("security", "<p>x</p>") == ("<p>x</p>", 0)


# ============================================================
# IDEMPOTENCE
# ============================================================

class TestIdempotence:

    @pytest.mark.parametrize("rule_id", AUTO_FIX_RULES)
    def test_satisfied_document_is_untouched(self, engine, rule_id):
        assert passes(engine, rule_id, GOOD_HTML)
        assert engine.apply_auto_fix(rule_id, GOOD_HTML) == GOOD_HTML

    @pytest.mark.parametrize("rule_id,html", [
        ("img-alt", "\n".join(['<img src="a.png" alt="Company logo">'] * 4 + ['<img src="b.png">'])),
        ("img-dimensions", "\n".join(
            ['<img src="a.png" width="600" height="300">'] * 7 + ['<img src="b.png" width="600">'] * 3
        )),
        ("no-flex-grid", '<div style="display:inline-grid;">x</div>'),
        ("secure-images", "\n".join(
            ['<img src="https://x.com/a.png">'] * 5 + ['<img src="http://x.com/b.png">']
        )),
        ("link-styles", "\n".join(
            ['<a href="https://x.com" style="color:#000; text-decoration:none;">x</a>'] * 7
            + ['<a href="https://x.com">y</a>'] * 3
        )),
    ])
    def test_passing_document_with_partial_violations_is_untouched(self, engine, rule_id, html):
        rule = engine.get_rule(rule_id)
        assert rule.test(html)
        assert rule.auto_fix(html) == html
        assert engine.apply_auto_fix(rule_id, html) == html

    def test_rule_gates_its_own_transform(self):
        rule = Rule(
            id="always-ok", category="bestPractice", weight=1, level="info",
            description="always-ok", test=lambda html: True,
            message=StaticMessage("x"), auto_fix=lambda html: html + "!",
        )
        assert rule.auto_fix("<p>x</p>") == "<p>x</p>"
        failing = replace(rule, test=lambda html: False)
        assert failing.auto_fix("<p>x</p>") == "<p>x</p>!"

    @pytest.mark.parametrize("rule_id", AUTO_FIX_RULES)
    def test_second_application_changes_nothing(self, engine, rule_id):
        once = engine.apply_auto_fix(rule_id, BAD_HTML)
        assert engine.apply_auto_fix(rule_id, once) == once

    @pytest.mark.parametrize("rule_id", [r for r in AUTO_FIX_RULES if r != "responsive-tables"])
    def test_fix_resolves_the_violation(self, engine, rule_id):
        assert not passes(engine, rule_id, BAD_HTML)
        assert passes(engine, rule_id, engine.apply_auto_fix(rule_id, BAD_HTML))

    def test_responsive_fix_patches_existing_tables(self, engine):
        fixed = engine.apply_auto_fix("responsive-tables", "<table><tr><td>x</td></tr></table>")
        assert fixed.startswith('<table width="100%" cellpadding="0" cellspacing="0" style="max-width:600px;">')
        assert passes(engine, "responsive-tables", fixed)


# ============================================================
# CATEGORY FIXES
# ============================================================

class TestApplyAllFixes:

    def test_counts_only_fixes_that_changed_the_text(self, engine):
        html = '<p>Hi</p><script>x()</script><img src="https://x.com/a.png">'
        fixed, count = engine.apply_all_fixes("security", html)
        assert count == 1
        assert fixed == '<p>Hi</p><img src="https://x.com/a.png">'

    def test_compatibility_fold(self, engine):
        fixed, count = engine.apply_all_fixes("compatibility", BAD_HTML)
        # doctype, html, table, inline-css, flex/grid, mso, font units
        assert count == 7
        report = engine.run(fixed)
        compat = [r for r in report.results if r.category == "compatibility"]
        assert all(r.passed for r in compat)

    def test_unknown_category_changes_nothing(self, engine):
        assert engine.apply_all_fixes("marketing", BAD_HTML) == (BAD_HTML, 0)

    def test_fix_then_rerun_raises_score(self, engine):
        before = engine.run(BAD_HTML).score
        html = BAD_HTML
        for category in engine.get_categories():
            html, _ = engine.apply_all_fixes(category, html)
        assert engine.run(html).score > before

    def test_fold_uses_catalogue_order(self):
        def append(suffix):
            return lambda html: html + suffix

        rules = [
            Rule(id="first", category="bestPractice", weight=1, level="info",
                 description="first", test=lambda html: False,
                 message=StaticMessage("x"), auto_fix=append("A")),
            Rule(id="second", category="bestPractice", weight=1, level="info",
                 description="second", test=lambda html: False,
                 message=StaticMessage("x"), auto_fix=append("B")),
        ]
        engine = RulesEngine(RuleCatalogue(rules, CATEGORIES))
        assert engine.apply_all_fixes("bestPractice", "") == ("AB", 2)


# ============================================================
# PREVIEWS
# ============================================================

class TestDiffSpans:

    def test_insert_span(self):
        spans = compute_diff_spans("Hello", "<!DOCTYPE html>\nHello")
        assert spans[0] == {
            "type": "insert",
            "text": "<!DOCTYPE html>\n",
            "fixed_start": 0,
            "fixed_end": 16,
        }
        assert spans[-1]["type"] == "equal"

    def test_identical_text_is_one_equal_span(self):
        spans = compute_diff_spans("same", "same")
        assert [s["type"] for s in spans] == ["equal"]

    def test_positions_cover_both_texts(self):
        original = "<p>a</p><script>x()</script><p>b</p>"
        fixed = "<p>a</p><p>b</p>"
        spans = compute_diff_spans(original, fixed)
        deleted = "".join(s["text"] for s in spans if s["type"] == "delete")
        assert len(deleted) == len("<script>x()</script>")
        assert "x()" in deleted
        kept = "".join(s["text"] for s in spans if s["type"] == "equal")
        assert kept == fixed

    def test_equal_spans_carry_both_offsets(self):
        spans = compute_diff_spans("<p>a</p><script>x()</script>", "<p>a</p>")
        equal = spans[0]
        assert equal["type"] == "equal"
        assert (equal["orig_start"], equal["orig_end"]) == (0, len(equal["text"]))
        assert (equal["fixed_start"], equal["fixed_end"]) == (0, len(equal["text"]))
        delete = spans[-1]
        assert delete["type"] == "delete"
        assert "fixed_start" not in delete
        assert delete["orig_end"] == len("<p>a</p><script>x()</script>")

    def test_changes_only(self):
        spans = compute_diff_spans("Hello", "<!DOCTYPE html>\nHello", include_equal=False)
        assert [s["type"] for s in spans] == ["insert"]
        assert compute_diff_spans("same", "same", include_equal=False) == []


class TestPreviews:

    def test_preview_fix(self, engine):
        preview = preview_fix(engine, "doctype-required", "<p>x</p>")
        assert preview["changed"] is True
        assert preview["fixed"].startswith("<!DOCTYPE html>")
        assert preview["original"] == "<p>x</p>"
        assert any(s["type"] == "insert" for s in preview["diff_spans"])
        assert all(s["type"] != "equal" for s in preview["diff_spans"])

    def test_preview_unknown_rule(self, engine):
        preview = preview_fix(engine, "nope", "<p>x</p>")
        assert preview["changed"] is False
        assert preview["diff_spans"] == []

    def test_preview_category(self, engine):
        preview = preview_category_fixes(engine, "security", "<p>a</p><script>x()</script>")
        assert preview["fixed_count"] == 1
        assert preview["fixed"] == "<p>a</p>"
        assert any(s["type"] == "delete" for s in preview["diff_spans"])
