"""
Component search by text query and/or purpose.

Text query: case-insensitive substring match against the component name, the
full title, the category, or all three (SearchIn). "*" and ".*" mean "match
everything".

Purpose: a named group of regex patterns ("form inputs", "navigation", ...)
matched against the story title, story name and component name. Any other
purpose string is split into words and each word becomes a pattern.

When both are given a story must satisfy both.
"""

import re
from dataclasses import dataclass
from typing import Optional

from models.enums import SearchIn
from storybook.components import ComponentInfo, components_sorted, map_stories_to_components

WILDCARD_QUERIES = {"*", ".*"}


@dataclass
class Purpose:
    patterns: list[re.Pattern]
    description: str


def _patterns(*words: str) -> list[re.Pattern]:
    return [re.compile(w, re.IGNORECASE) for w in words]


PURPOSE_PATTERNS: dict[str, Purpose] = {
    "form inputs": Purpose(
        _patterns("input", "textfield", "textarea", "select", "dropdown", "checkbox", "radio",
                  "switch", "toggle", "slider", "datepicker", "timepicker", "form", "field"),
        "Components for collecting user input in forms",
    ),
    "navigation": Purpose(
        _patterns("nav", "menu", "breadcrumb", "tabs?", "stepper", "pagination", "link",
                  "sidebar", "drawer", "appbar", "toolbar", "header"),
        "Components for navigating through the application",
    ),
    "feedback": Purpose(
        _patterns("alert", "snackbar", "toast", "notification", "message", "error", "warning",
                  "success", "info", "banner", "dialog", "modal", "popup", "tooltip", "popover"),
        "Components for providing feedback to users",
    ),
    "data display": Purpose(
        _patterns("table", "datagrid", "list", "card", "chip", "badge", "avatar", "image",
                  "icon", "typography", "text", "label", "tag"),
        "Components for displaying data and content",
    ),
    "layout": Purpose(
        _patterns("grid", "container", "box", "stack", "flex", "spacer", "divider", "layout",
                  "panel", "section", "wrapper", "column", "row"),
        "Components for structuring and laying out content",
    ),
    "buttons": Purpose(
        _patterns("button", "fab", r"icon.*button", "action", "cta"),
        "Interactive button components",
    ),
    "progress": Purpose(
        _patterns("progress", "loading", "spinner", "skeleton", "loader",
                  r"circular.*progress", r"linear.*progress"),
        "Components for showing loading and progress states",
    ),
    "media": Purpose(
        _patterns("image", "video", "audio", "media", "gallery", "carousel", "slider", "player"),
        "Components for displaying media content",
    ),
}


def get_purpose(purpose: str) -> Purpose:
    known = PURPOSE_PATTERNS.get(purpose.lower())
    if known:
        return known
    words = purpose.lower().split()
    return Purpose(
        patterns=[re.compile(re.escape(w), re.IGNORECASE) for w in words],
        description=f"Components related to {purpose}",
    )


def _matches_query(query: str, search_in: SearchIn, name: str, title: str, category: Optional[str]) -> bool:
    name, title, category = name.lower(), title.lower(), (category or "").lower()
    if search_in == SearchIn.NAME:
        return query in name
    if search_in == SearchIn.TITLE:
        return query in title
    if search_in == SearchIn.CATEGORY:
        return bool(category) and query in category
    return query in name or query in title or (bool(category) and query in category)


def search_components(
    stories,
    query: Optional[str] = None,
    purpose: Optional[str] = None,
    search_in: SearchIn = SearchIn.ALL,
) -> tuple[list[ComponentInfo], Optional[Purpose]]:
    """Returns the matching components (sorted by name) and the purpose used, if any."""
    query = (query or "").lower()
    text_query = query if query and query not in WILDCARD_QUERIES else ""
    purpose_cfg = get_purpose(purpose) if purpose else None

    def keep(story: dict, name: str, category: Optional[str]) -> bool:
        title = story.get("title", "")
        if purpose_cfg:
            story_name = story.get("name") or story.get("story") or ""
            if not any(p.search(title) or p.search(story_name) or p.search(name)
                       for p in purpose_cfg.patterns):
                return False
        if text_query:
            return _matches_query(text_query, search_in, name, title, category)
        return True

    return components_sorted(map_stories_to_components(stories, filter_fn=keep)), purpose_cfg
