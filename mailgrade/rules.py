"""
Rule Definitions — The Email Template Catalogue

This module defines:
  1. The rule data model (Category, Rule, message variants)
  2. The category taxonomy and its display weights
  3. Every built-in rule: predicate, message, guidance, auto-fix

Rules are pattern-based. They read raw markup with regular
expressions, never a parsed DOM, so every predicate must
tolerate empty, broken, or hostile input without raising.

Thresholds are tolerance levels, not accuracy targets:
a large template rarely reaches 100% compliance, so image
and link rules pass at 70-80% coverage. Rules that count
occurrences pass vacuously when there is nothing to count.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

LEVELS = ("error", "warning", "info")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Category:
    """A weighted grouping of related rules."""
    id: str
    name: str
    weight: int    # Percentage points, all categories sum to 100
    color: str     # Display only


@dataclass(frozen=True)
class StaticMessage:
    """A message that reads the same whatever the outcome."""
    text: str

    def resolve(self, passed: bool, html: str) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedMessage:
    """A message built from the outcome and the document."""
    render: Callable[[bool, str], str]

    def resolve(self, passed: bool, html: str) -> str:
        return self.render(passed, html)


Message = Union[StaticMessage, ComputedMessage]


@dataclass(frozen=True)
class Rule:
    """
    A single named check.

    `test` is a pure predicate over the whole document. `auto_fix`,
    when present, is a pure text transform that resolves the
    violation. The transform is stored gated on `test`: a document
    that already satisfies the rule comes back untouched, however
    the fix is reached.
    """
    id: str
    category: str
    weight: float
    level: str               # "error", "warning", "info"
    description: str
    test: Callable[[str], bool]
    message: Message
    fix: Optional[str] = None
    auto_fix: Optional[Callable[[str], str]] = None

    def __post_init__(self):
        fix = self.auto_fix
        if fix is None:
            return
        if isinstance(fix, _GatedFix):
            fix = fix.transform    # re-gate on this rule's test, e.g. after replace()
        object.__setattr__(self, "auto_fix", _GatedFix(self.test, fix))

    @property
    def has_auto_fix(self) -> bool:
        return self.auto_fix is not None

    def remediate(self, html: str) -> str:
        """Apply the auto-fix if the document currently violates the rule."""
        if self.auto_fix is None:
            return html
        return self.auto_fix(html)


@dataclass(frozen=True)
class _GatedFix:
    """A transform that only runs on documents failing its rule."""
    test: Callable[[str], bool]
    transform: Callable[[str], str]

    def __call__(self, html: str) -> str:
        if self.test(html):
            return html
        return self.transform(html)


# ============================================================
# CATEGORIES (display weights, not used in scoring)
# ============================================================

CATEGORIES: tuple[Category, ...] = (
    Category("compatibility", "Compatibility", 35, "#3b82f6"),
    Category("accessibility", "Accessibility", 25, "#10b981"),
    Category("performance", "Performance", 20, "#8b5cf6"),
    Category("security", "Security", 10, "#ef4444"),
    Category("bestPractice", "Best Practices", 10, "#f59e0b"),
)


# ============================================================
# SHARED PATTERNS
# ============================================================

_IMG_TAG = re.compile(r"<img[^>]*>", re.IGNORECASE)
_TABLE_TAG = re.compile(r"<table[^>]*>", re.IGNORECASE)
_LINK_TAG = re.compile(r"<a\s[^>]*href\s*=\s*[\"'][^\"']*[\"'][^>]*>", re.IGNORECASE)
_STYLE_ATTR = re.compile(r"style\s*=\s*[\"'][^\"']+[\"']", re.IGNORECASE)
_FONT_SIZE = re.compile(r"font-size\s*:\s*[^;]+", re.IGNORECASE)

_ALT_VALUE = re.compile(r"alt\s*=\s*[\"']([^\"']*)[\"']", re.IGNORECASE)
_WIDTH_ATTR = re.compile(r"width\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_HEIGHT_ATTR = re.compile(r"height\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_SRC_VALUE = re.compile(r"src\s*=\s*[\"']([^\"']*)[\"']", re.IGNORECASE)

_VIEWPORT_META = re.compile(
    r"<meta[^>]*name\s*=\s*[\"']viewport[\"'][^>]*>", re.IGNORECASE,
)
_VIEWPORT_TAG = '<meta name="viewport" content="width=device-width, initial-scale=1">'

FORBIDDEN_TAGS = (
    "script", "form", "video", "iframe", "audio",
    "object", "embed", "input", "textarea", "button",
)
_FORBIDDEN_OPEN = {
    name: re.compile(rf"<{name}(?![\w-])", re.IGNORECASE) for name in FORBIDDEN_TAGS
}
# Void elements have no closing tag, so only the paired ones get element removal
_FORBIDDEN_ELEMENT = re.compile(
    r"<(script|form|video|iframe|audio|object|textarea|button)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_FORBIDDEN_STRAY = re.compile(
    r"</?(?:%s)(?![\w-])[^>]*>" % "|".join(FORBIDDEN_TAGS), re.IGNORECASE,
)

_PREHEADER_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"preheader",
        r"preview-text",
        r"display\s*:\s*none[^>]*>[^<]{10,150}<",
        r"visibility\s*:\s*hidden[^>]*>[^<]{10,150}<",
        r"font-size\s*:\s*0[^>]*>[^<]{10,150}<",
        r"height\s*:\s*0[^>]*>[^<]{10,150}<",
        r"opacity\s*:\s*0[^>]*>[^<]{10,150}<",
    )
]

_SAFE_SRC_PREFIXES = ("https://", "data:", "/")

LINK_STYLE = "color:#3b82f6; text-decoration:underline;"


def _ratio_at_least(hits: int, total: int, threshold: float) -> bool:
    return total == 0 or hits / total >= threshold


# ============================================================
# COMPATIBILITY
# ============================================================

def _has_doctype(html: str) -> bool:
    return "<!DOCTYPE" in html or "<!doctype" in html


def _fix_doctype(html: str) -> str:
    if not _has_doctype(html):
        return "<!DOCTYPE html>\n" + html
    return html


def _has_html_tags(html: str) -> bool:
    return "<html" in html and "</html>" in html


def _fix_html_tags(html: str) -> str:
    if not _has_html_tags(html):
        return "<html>\n" + html + "\n</html>"
    return html


def _has_table(html: str) -> bool:
    return _TABLE_TAG.search(html) is not None


def _table_message(passed: bool, html: str) -> str:
    if passed:
        return f"Table-based layout found ({len(_TABLE_TAG.findall(html))} tables) ✓"
    return "No table-based layout found. Email layouts must use tables for compatibility"


def _fix_table_layout(html: str) -> str:
    # Short fragments are left alone; wrapping a snippet does more harm than good
    if _has_table(html) or len(html) <= 100:
        return html
    return (
        '<table width="100%" cellpadding="0" cellspacing="0" border="0" '
        'style="max-width:600px; margin:0 auto;">\n'
        "  <tr>\n"
        '    <td align="center">\n'
        f"{html}\n"
        "    </td>\n"
        "  </tr>\n"
        "</table>"
    )


def _has_inline_styles(html: str) -> bool:
    return len(_STYLE_ATTR.findall(html)) >= 3


def _inline_styles_message(passed: bool, html: str) -> str:
    count = len(_STYLE_ATTR.findall(html))
    if passed:
        return f"Inline styles detected ({count} elements) ✓"
    return (
        f"Missing inline styles (only {count} found). "
        "Use style attributes instead of <style> tags"
    )


_INLINE_STYLE_DEFAULTS = (
    (re.compile(r"<p(?=[\s>])(?![^>]*\bstyle\s*=)"),
     '<p style="margin:0 0 15px 0; font-family:Arial,sans-serif;"'),
    (re.compile(r"<h1(?=[\s>])(?![^>]*\bstyle\s*=)"),
     '<h1 style="font-family:Arial,sans-serif; font-size:24px; margin:0 0 15px 0;"'),
    (re.compile(r"<h2(?=[\s>])(?![^>]*\bstyle\s*=)"),
     '<h2 style="font-family:Arial,sans-serif; font-size:20px; margin:0 0 12px 0;"'),
    (re.compile(r"<td(?=>)"),
     '<td style="font-family:Arial,sans-serif;"'),
)
_UNSTYLED_LINK = re.compile(r"<a\s+(href=[^>]*?)(\s*/)?>")


def _fix_inline_styles(html: str) -> str:
    fixed = html
    for pattern, replacement in _INLINE_STYLE_DEFAULTS:
        fixed = pattern.sub(replacement, fixed)

    def _style_link(match: re.Match) -> str:
        if re.search(r"\bstyle\s*=", match.group(1), re.IGNORECASE):
            return match.group(0)
        return f'<a {match.group(1)} style="color:#3b82f6; text-decoration:none;"{match.group(2) or ""}>'

    return _UNSTYLED_LINK.sub(_style_link, fixed)


_FLEX_GRID = (
    re.compile(r"display\s*:\s*(?:flex|inline-flex|grid)", re.IGNORECASE),
    re.compile(r"flex-direction", re.IGNORECASE),
    re.compile(r"grid-template", re.IGNORECASE),
)
_FLEX_GRID_REPLACEMENTS = (
    (re.compile(r"display\s*:\s*flex", re.IGNORECASE), "display: block"),
    (re.compile(r"display\s*:\s*inline-flex", re.IGNORECASE), "display: inline-block"),
    (re.compile(r"display\s*:\s*grid", re.IGNORECASE), "display: block"),
    (re.compile(r"display\s*:\s*inline-grid", re.IGNORECASE), "display: inline-block"),
)


def _no_flex_grid(html: str) -> bool:
    return not any(p.search(html) for p in _FLEX_GRID)


def _fix_flex_grid(html: str) -> str:
    for pattern, replacement in _FLEX_GRID_REPLACEMENTS:
        html = pattern.sub(replacement, html)
    return html


_MSO_PROPERTY = re.compile(r"mso-[a-z-]+:", re.IGNORECASE)
_MSO_BLOCK = (
    "<!--[if mso]>\n"
    '<style type="text/css">\n'
    "body, table, td { font-family: Arial, sans-serif !important; }\n"
    "</style>\n"
    "<![endif]-->\n"
)


def _has_mso_support(html: str) -> bool:
    return "[if mso]" in html or _MSO_PROPERTY.search(html) is not None


def _fix_mso_support(html: str) -> str:
    if "[if mso]" not in html:
        return _MSO_BLOCK + html
    return html


def _responsive_table(tag: str) -> bool:
    has_width = (
        _WIDTH_ATTR.search(tag) is not None
        or re.search(r"width\s*:\s*\d+%", tag, re.IGNORECASE) is not None
    )
    has_spacing = re.search(r"cellpadding|max-width", tag, re.IGNORECASE) is not None
    return has_width and has_spacing


def _has_responsive_tables(html: str) -> bool:
    # No tables is a failure here: there is nothing responsive to find
    return any(_responsive_table(tag) for tag in _TABLE_TAG.findall(html))


def _fix_responsive_tables(html: str) -> str:
    def _patch(match: re.Match) -> str:
        tag = match.group(0)
        if _responsive_table(tag):
            return tag
        attrs = match.group(1)
        closing = ">"
        if attrs.rstrip().endswith("/"):
            attrs = attrs.rstrip()[:-1]
            closing = " />"
        added = ""
        if not _WIDTH_ATTR.search(tag) and not re.search(r"width\s*:\s*\d+%", tag, re.IGNORECASE):
            added += ' width="100%"'
        if not re.search(r"cellpadding", tag, re.IGNORECASE):
            added += ' cellpadding="0" cellspacing="0"'
        if not re.search(r"\bstyle\s*=", tag, re.IGNORECASE):
            added += ' style="max-width:600px;"'
        return f"<table{attrs.rstrip()}{added}{closing}"

    return re.sub(r"<table([^>]*)>", _patch, html, flags=re.IGNORECASE)


def _absolute_font_size(declaration: str) -> bool:
    parts = declaration.split(":")
    value = parts[1].strip() if len(parts) > 1 else ""
    if "px" in value or "pt" in value:
        return True
    return re.fullmatch(r"\d+", value) is not None


def _has_absolute_font_sizes(html: str) -> bool:
    return all(_absolute_font_size(d) for d in _FONT_SIZE.findall(html))


def _fix_font_sizes(html: str) -> str:
    return re.sub(
        r"font-size\s*:\s*([0-9.]+)\s*(?:em|rem)\b",
        r"font-size: \1px",
        html,
        flags=re.IGNORECASE,
    )


def _styled_link(tag: str) -> bool:
    return (
        re.search(r"color\s*:\s*[^;]+", tag, re.IGNORECASE) is not None
        and re.search(r"text-decoration\s*:\s*[^;]+", tag, re.IGNORECASE) is not None
    )


def _has_styled_links(html: str) -> bool:
    links = _LINK_TAG.findall(html)
    return _ratio_at_least(sum(1 for tag in links if _styled_link(tag)), len(links), 0.7)


def _fix_link_styles(html: str) -> str:
    def _patch(match: re.Match) -> str:
        if "style=" in match.group(0):
            return match.group(0)
        return f'<a {match.group(1)} style="{LINK_STYLE}">'

    return re.sub(
        r"<a\s+([^>]*href\s*=\s*[\"'][^\"']*[\"'][^>]*)>", _patch, html,
        flags=re.IGNORECASE,
    )


# ============================================================
# ACCESSIBILITY & PERFORMANCE (images)
# ============================================================

def _meaningful_alt(tag: str) -> bool:
    match = _ALT_VALUE.search(tag)
    return match is not None and len(match.group(1).strip()) > 2


def _has_alt_text(html: str) -> bool:
    imgs = _IMG_TAG.findall(html)
    return _ratio_at_least(sum(1 for tag in imgs if _meaningful_alt(tag)), len(imgs), 0.8)


def _alt_text_message(passed: bool, html: str) -> str:
    imgs = _IMG_TAG.findall(html)
    if not imgs:
        return "No images found"
    valid = sum(1 for tag in imgs if _meaningful_alt(tag))
    if passed:
        return f"{valid}/{len(imgs)} images have alt text ✓"
    return f"{len(imgs) - valid} images missing alt text"


def _patch_img_tags(html: str, patch: Callable[[str], str]) -> str:
    """Append attributes to every <img>, keeping a trailing '/' in place."""
    def _replace(match: re.Match) -> str:
        attrs, slash = match.group(1), match.group(2) or ""
        added = patch(match.group(0))
        if not added:
            return match.group(0)
        return f"<img{attrs}{added}{slash}>"

    return re.sub(r"<img([^>]*?)(\s*/)?>", _replace, html, flags=re.IGNORECASE)


def _fix_alt_text(html: str) -> str:
    return _patch_img_tags(
        html,
        lambda tag: "" if re.search(r"\balt\s*=", tag, re.IGNORECASE) else ' alt="Image"',
    )


def _has_dimensions(tag: str) -> bool:
    return _WIDTH_ATTR.search(tag) is not None and _HEIGHT_ATTR.search(tag) is not None


def _has_image_dimensions(html: str) -> bool:
    imgs = _IMG_TAG.findall(html)
    return _ratio_at_least(sum(1 for tag in imgs if _has_dimensions(tag)), len(imgs), 0.7)


def _dimensions_message(passed: bool, html: str) -> str:
    imgs = _IMG_TAG.findall(html)
    if not imgs:
        return "No images found"
    dimensioned = sum(1 for tag in imgs if _has_dimensions(tag))
    if passed:
        return f"{dimensioned}/{len(imgs)} images have dimensions ✓"
    return f"{len(imgs) - dimensioned} images missing dimensions"


def _missing_dimensions(tag: str) -> str:
    added = ""
    if not _WIDTH_ATTR.search(tag):
        added += ' width="600"'
    if not _HEIGHT_ATTR.search(tag):
        added += ' height="auto"'
    return added


def _fix_image_dimensions(html: str) -> str:
    return _patch_img_tags(html, _missing_dimensions)


# ============================================================
# SECURITY
# ============================================================

def _found_forbidden_tags(html: str) -> list[str]:
    return [name for name, pattern in _FORBIDDEN_OPEN.items() if pattern.search(html)]


def _no_forbidden_tags(html: str) -> bool:
    return not _found_forbidden_tags(html)


def _forbidden_message(passed: bool, html: str) -> str:
    if passed:
        return "No forbidden tags detected ✓"
    return f"Found forbidden tags: {', '.join(_found_forbidden_tags(html))}"


def _strip_forbidden_tags(html: str) -> str:
    html = _FORBIDDEN_ELEMENT.sub("", html)
    return _FORBIDDEN_STRAY.sub("", html)


def _secure_src(tag: str) -> bool:
    match = _SRC_VALUE.search(tag)
    return match is not None and match.group(1).startswith(_SAFE_SRC_PREFIXES)


def _has_secure_images(html: str) -> bool:
    imgs = _IMG_TAG.findall(html)
    return _ratio_at_least(sum(1 for tag in imgs if _secure_src(tag)), len(imgs), 0.8)


def _secure_images_message(passed: bool, html: str) -> str:
    imgs = _IMG_TAG.findall(html)
    if not imgs:
        return "No images found"
    secure = sum(1 for tag in imgs if _secure_src(tag))
    if passed:
        return f"{secure}/{len(imgs)} images use HTTPS ✓"
    return f"{len(imgs) - secure} images may be insecure (use HTTPS)"


def _fix_insecure_sources(html: str) -> str:
    return re.sub(
        r"src\s*=\s*[\"']http://([^\"']*)[\"']", r'src="https://\1"', html,
        flags=re.IGNORECASE,
    )


# ============================================================
# BEST PRACTICES
# ============================================================

def _has_preheader(html: str) -> bool:
    return any(p.search(html) for p in _PREHEADER_PATTERNS)


def _fix_preheader(html: str) -> str:
    if re.search(r"display\s*:\s*none[^>]*>[^<]{10,}", html, re.IGNORECASE):
        return html
    return (
        '<span style="display:none; font-size:0; height:0; opacity:0; visibility:hidden;">\n'
        "  Preview your email here\n"
        "</span>\n"
        f"{html}"
    )


def _has_viewport_meta(html: str) -> bool:
    return _VIEWPORT_META.search(html) is not None


def _fix_viewport_meta(html: str) -> str:
    if _has_viewport_meta(html):
        return html
    if "<head>" in html:
        return html.replace("<head>", f"<head>\n  {_VIEWPORT_TAG}", 1)
    if "<html>" in html:
        return html.replace("<html>", f"<html>\n<head>\n  {_VIEWPORT_TAG}\n</head>", 1)
    return f"{_VIEWPORT_TAG}\n{html}"


def _outcome(passed_text: str, failed_text: str) -> ComputedMessage:
    return ComputedMessage(lambda passed, html: passed_text if passed else failed_text)


# ============================================================
# THE CATALOGUE (construction order is evaluation and fix order)
# ============================================================

def build_rules() -> list[Rule]:
    """Return a fresh list of the built-in rules in catalogue order."""
    return [
        Rule(
            id="doctype-required",
            category="compatibility",
            weight=10,
            level="error",
            description="DOCTYPE declaration required",
            test=_has_doctype,
            message=_outcome(
                "DOCTYPE declaration found ✓",
                "Missing DOCTYPE declaration. Add <!DOCTYPE html> at the top",
            ),
            fix="Add <!DOCTYPE html> at the very beginning of your HTML",
            auto_fix=_fix_doctype,
        ),
        Rule(
            id="html-tag-required",
            category="compatibility",
            weight=8,
            level="error",
            description="HTML tag required",
            test=_has_html_tags,
            message=_outcome(
                "HTML tags found ✓",
                "Missing <html> tags. Wrap your content in <html> tags",
            ),
            fix="Wrap your content in <html> tags: <html>...</html>",
            auto_fix=_fix_html_tags,
        ),
        Rule(
            id="table-layout",
            category="compatibility",
            weight=15,
            level="error",
            description="Table-based layout required for email clients",
            test=_has_table,
            message=ComputedMessage(_table_message),
            fix=(
                "Wrap your layout in a table structure:\n"
                '<table width="100%" cellpadding="0" cellspacing="0" border="0">\n'
                "  <tr>\n"
                '    <td align="center">\n'
                "      <!-- Your content here -->\n"
                "    </td>\n"
                "  </tr>\n"
                "</table>"
            ),
            auto_fix=_fix_table_layout,
        ),
        Rule(
            id="inline-css",
            category="compatibility",
            weight=12,
            level="error",
            description="Inline styles required for email clients",
            test=_has_inline_styles,
            message=ComputedMessage(_inline_styles_message),
            fix='Add style attributes to elements: <div style="font-family: Arial; color: #333;">',
            auto_fix=_fix_inline_styles,
        ),
        Rule(
            id="no-flex-grid",
            category="compatibility",
            weight=10,
            level="error",
            description="Avoid Flexbox and Grid for email compatibility",
            test=_no_flex_grid,
            message=_outcome(
                "No Flexbox/Grid detected ✓",
                "Flexbox or Grid detected. Use tables instead for email compatibility",
            ),
            fix="Replace Flexbox/Grid with table layouts",
            auto_fix=_fix_flex_grid,
        ),
        Rule(
            id="mso-support",
            category="compatibility",
            weight=15,
            level="warning",
            description="Microsoft Outlook conditional comments",
            test=_has_mso_support,
            message=_outcome(
                "Outlook conditional comments detected ✓",
                "Missing Outlook support. Add conditional comments for better rendering",
            ),
            fix=(
                "Add Outlook conditional comments:\n"
                "<!--[if mso]>\n"
                '<style type="text/css">\n'
                "  /* Outlook-specific styles */\n"
                "  .outlook-fix { display: none !important; }\n"
                "</style>\n"
                "<![endif]-->"
            ),
            auto_fix=_fix_mso_support,
        ),
        Rule(
            id="img-alt",
            category="accessibility",
            weight=10,
            level="warning",
            description="Alt text for images",
            test=_has_alt_text,
            message=ComputedMessage(_alt_text_message),
            fix='Add alt attribute to images: <img src="image.jpg" alt="Description">',
            auto_fix=_fix_alt_text,
        ),
        Rule(
            id="img-dimensions",
            category="performance",
            weight=8,
            level="warning",
            description="Width and height attributes for images",
            test=_has_image_dimensions,
            message=ComputedMessage(_dimensions_message),
            fix='Add width and height attributes: <img src="image.jpg" width="600" height="300">',
            auto_fix=_fix_image_dimensions,
        ),
        Rule(
            id="no-forbidden-tags",
            category="security",
            weight=10,
            level="error",
            description="Remove dangerous tags from email",
            test=_no_forbidden_tags,
            message=ComputedMessage(_forbidden_message),
            fix=(
                "Remove script, form, video, iframe, audio, object, embed, "
                "input, textarea, and button tags"
            ),
            auto_fix=_strip_forbidden_tags,
        ),
        Rule(
            id="preheader",
            category="bestPractice",
            weight=5,
            level="info",
            description="Preheader text for email preview",
            test=_has_preheader,
            message=_outcome(
                "Preheader text detected ✓",
                "Consider adding preheader text for better open rates",
            ),
            fix=(
                "Add hidden preheader text:\n"
                '<span style="display:none; font-size:0; height:0; opacity:0;">\n'
                "  Your preview text here. This won't be visible in the email body.\n"
                "</span>"
            ),
            auto_fix=_fix_preheader,
        ),
        Rule(
            id="viewport-meta",
            category="bestPractice",
            weight=3,
            level="info",
            description="Viewport meta tag for mobile",
            test=_has_viewport_meta,
            message=_outcome(
                "Viewport meta tag found ✓",
                "Add viewport meta tag for better mobile rendering",
            ),
            fix=f"Add: {_VIEWPORT_TAG}",
            auto_fix=_fix_viewport_meta,
        ),
        Rule(
            id="responsive-tables",
            category="compatibility",
            weight=8,
            level="warning",
            description="Responsive table design",
            test=_has_responsive_tables,
            message=_outcome(
                "Responsive tables detected ✓",
                "Tables may not be mobile-responsive",
            ),
            fix='Add: <table width="100%" style="max-width:600px;" cellpadding="0" cellspacing="0">',
            auto_fix=_fix_responsive_tables,
        ),
        Rule(
            id="font-size-units",
            category="compatibility",
            weight=6,
            level="warning",
            description="Use absolute font units",
            test=_has_absolute_font_sizes,
            message=_outcome(
                "Font sizes use absolute units ✓",
                "Avoid em/rem units in email. Use px or pt",
            ),
            fix='Use px or pt: style="font-size: 16px;"',
            auto_fix=_fix_font_sizes,
        ),
        Rule(
            id="secure-images",
            category="security",
            weight=7,
            level="warning",
            description="Use HTTPS for images",
            test=_has_secure_images,
            message=ComputedMessage(_secure_images_message),
            fix='Use HTTPS URLs for images: src="https://example.com/image.jpg"',
            auto_fix=_fix_insecure_sources,
        ),
        Rule(
            id="link-styles",
            category="compatibility",
            weight=4,
            level="info",
            description="Proper link styling",
            test=_has_styled_links,
            message=_outcome(
                "Links properly styled ✓",
                "Style links with color and text-decoration",
            ),
            fix=f'Add: <a href="#" style="{LINK_STYLE}">',
            auto_fix=_fix_link_styles,
        ),
    ]
