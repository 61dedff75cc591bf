"""
Group Storybook stories into components.

A story title looks like "Forms/Inputs/TextField": the last segment is the
component name and everything before it is the category. Stories sharing a
name (or, with key="title", a full title) are collected under one
ComponentInfo.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from storybook.resolver import component_segment

# filter_fn(story, component_name, category) → keep?
StoryFilter = Callable[[dict, str, Optional[str]], bool]


@dataclass
class ComponentInfo:
    id: str
    name: str
    title: str
    category: Optional[str] = None
    stories: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {"id": self.id, "name": self.name, "title": self.title, "stories": self.stories}
        if self.category:
            data["category"] = self.category
        return data

    def to_compact(self) -> dict:
        data = {"id": self.id, "name": self.name, "title": self.title}
        if self.category:
            data["category"] = self.category
        data["variantCount"] = len(self.stories)
        return data


def split_title(title: str) -> tuple[str, Optional[str]]:
    """'Forms/Inputs/TextField' → ('TextField', 'Forms/Inputs')"""
    parts = title.split("/")
    name = parts[-1] or title
    category = "/".join(parts[:-1]) or None
    return name, category


def map_stories_to_components(
    stories,
    filter_fn: Optional[StoryFilter] = None,
    key: str = "name",
) -> dict[str, ComponentInfo]:
    story_list = list(stories.values()) if isinstance(stories, dict) else list(stories)
    components: dict[str, ComponentInfo] = {}

    for story in story_list:
        title = story.get("title", "")
        name, category = split_title(title)

        if filter_fn and not filter_fn(story, name, category):
            continue

        map_key = title.lower() if key == "title" else name
        if map_key not in components:
            story_id = story.get("id", "")
            components[map_key] = ComponentInfo(
                id=component_segment(story_id) or story_id,
                name=name,
                title=title,
                category=category,
            )
        components[map_key].stories.append(story)

    return components


def components_sorted(components: dict[str, ComponentInfo]) -> list[ComponentInfo]:
    return sorted(components.values(), key=lambda c: c.name.lower())
