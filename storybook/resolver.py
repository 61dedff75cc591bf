"""
Story resolver — turns a loose component id into a concrete story id.

Storybook addresses every story as "<componentId>--<variantId>", e.g.
"button--primary". Callers often only know the component ("button"), so
before fetching we pick one of its stories:

    1. Split every story id on the first "--" → component segment
    2. Keep the stories whose segment equals the input (case-insensitive)
    3. Prefer the one ending in "--default"; otherwise the first match in
       index order

Ids that already contain "--" are returned untouched, WITHOUT checking the
index. That skips a network round-trip; a bad id fails later as a fetch
error instead of a not-found.
"""

from models.exceptions import StoryNotFoundError

STORY_ID_SEPARATOR = "--"
DEFAULT_VARIANT_SUFFIX = "--default"


def needs_resolution(component_id: str) -> bool:
    return STORY_ID_SEPARATOR not in component_id


def component_segment(story_id: str) -> str:
    return story_id.split(STORY_ID_SEPARATOR, 1)[0]


def stories_from_index(index: dict) -> dict:
    """Storybook 6 serves `stories`, Storybook 7+ serves `entries`."""
    return index.get("stories") or index.get("entries") or {}


def resolve_story_id(component_id: str, stories: dict) -> str:
    if not needs_resolution(component_id):
        return component_id

    wanted = component_id.lower()
    first_match = None
    default_match = None
    for story_id in stories:
        if component_segment(story_id).lower() != wanted:
            continue
        if first_match is None:
            first_match = story_id
        if story_id.endswith(DEFAULT_VARIANT_SUFFIX) and default_match is None:
            default_match = story_id

    resolved = default_match or first_match
    if resolved is None:
        raise StoryNotFoundError(f"No stories found for component: {component_id}")
    return resolved


def list_variants(component_id: str, stories: dict) -> list[str]:
    """Variant names of every story belonging to a component, in index order."""
    wanted = component_id.lower()
    variants = []
    for story_id in stories:
        parts = story_id.split(STORY_ID_SEPARATOR)
        if parts[0].lower() != wanted:
            continue
        variants.append(parts[1] if len(parts) > 1 and parts[1] else "default")

    if not variants:
        raise StoryNotFoundError(f"No variants found for component: {component_id}")
    return variants
