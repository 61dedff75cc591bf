"""
Component dependency detection.

A story's markup only shows which other components it renders indirectly:
through the class names they stamp on their elements ("card__header",
"Button-root") and, for web components, through custom tag names
("<ds-icon>"). find_dependencies() matches both against the component ids in
the stories index:

    internal → another component of this Storybook
    external → a custom element (tag containing "-") no story accounts for

A class or custom tag names a component when, lowercased and with "-" and
"_" removed, it starts with that component's id. The longest id wins, so
"buttongroup__item" counts as buttongroup, not button. Plain HTML tags
("button", "div") are never matched.
"""

import re
from dataclasses import dataclass
from typing import Optional

from storybook.client import ComponentHTML
from storybook.resolver import component_segment

_SEPARATORS_RE = re.compile(r"[-_]")


@dataclass
class ComponentDependencies:
    story_id: str
    internal: list[str]
    external: list[str]

    @property
    def dependencies(self) -> list[str]:
        return sorted(set(self.internal) | set(self.external))

    def to_dict(self) -> dict:
        return {
            "storyId": self.story_id,
            "dependencies": self.dependencies,
            "internalComponents": self.internal,
            "externalComponents": self.external,
        }


def _normalize(name: str) -> str:
    return _SEPARATORS_RE.sub("", name.lower())


def known_components(stories: dict) -> dict[str, str]:
    """Normalized component id → component id, for every component in the index."""
    known = {}
    for story_id in stories:
        segment = component_segment(story_id).lower()
        if segment:
            known[_normalize(segment)] = segment
    return known


def match_component(name: str, known: dict[str, str]) -> Optional[str]:
    normalized = _normalize(name)
    best_key = None
    for key in known:
        if key and normalized.startswith(key) and (best_key is None or len(key) > len(best_key)):
            best_key = key
    return known[best_key] if best_key else None


def find_dependencies(component: ComponentHTML, stories: dict) -> ComponentDependencies:
    known = known_components(stories)
    own = component_segment(component.story_id).lower()
    internal: set[str] = set()
    external: set[str] = set()

    for class_name in component.classes:
        match = match_component(class_name, known)
        if match and match != own:
            internal.add(match)

    for tag in component.elements:
        if "-" not in tag:
            continue
        match = match_component(tag, known)
        if match is None:
            external.add(tag)
        elif match != own:
            internal.add(match)

    return ComponentDependencies(
        story_id=component.story_id,
        internal=sorted(internal),
        external=sorted(external),
    )
