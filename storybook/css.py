"""
Storybook boilerplate CSS filter.

A story's iframe page carries Storybook's own styles next to the component's:
preview chrome (.sb-*), docs blocks, scrollbars, the "no preview" screen and
page resets. None of that is useful to someone copying the component, so
every <style> block goes through filter_storybook_styles() before it is
returned. The function is pure and never raises.

Rules are split at the top level only (braces are counted), so @media blocks
are kept or dropped as a whole.
"""

import re

STORYBOOK_SELECTOR_PATTERNS = [
    re.compile(r"\.sb-"),
    re.compile(r"#storybook-"),
    re.compile(r"\.docs-story"),
    re.compile(r"\.docblock-"),
    re.compile(r"\.os-"),              # OverlayScrollbars, used by the manager UI
    re.compile(r"\.innerZoomElementWrapper"),
    re.compile(r"^\s*(html|body)(\s*,\s*(html|body))*\s*$"),
]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def split_rules(css: str) -> list[str]:
    """Split a stylesheet into top-level rules (at-rules included)."""
    rules = []
    depth = 0
    start = 0
    for i, ch in enumerate(css):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                rules.append(css[start:i + 1].strip())
                start = i + 1
            depth = max(depth, 0)
        elif ch == ";" and depth == 0:
            # @import / @charset statements
            rules.append(css[start:i + 1].strip())
            start = i + 1
    tail = css[start:].strip()
    if tail:
        rules.append(tail)
    return [r for r in rules if r]


def is_storybook_rule(rule: str) -> bool:
    selector = rule.split("{", 1)[0].strip()
    if selector.startswith("@"):
        # Judge an at-rule block by what it contains
        inner = rule[rule.find("{") + 1:rule.rfind("}")] if "{" in rule else ""
        nested = split_rules(inner)
        return bool(nested) and all(is_storybook_rule(r) for r in nested)
    return any(p.search(selector) for p in STORYBOOK_SELECTOR_PATTERNS)


def filter_storybook_styles(styles: list[str]) -> list[str]:
    filtered = []
    for block in styles or []:
        css = _COMMENT_RE.sub("", block)
        kept = [rule for rule in split_rules(css) if not is_storybook_rule(rule)]
        if kept:
            filtered.append("\n".join(kept))
    return filtered
