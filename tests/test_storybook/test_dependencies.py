"""
Tests for component dependency detection.
"""

from storybook.client import ComponentHTML
from storybook.dependencies import find_dependencies, known_components, match_component

STORIES = {
    "card--default": {},
    "button--primary": {},
    "button-group--default": {},
    "icon--default": {},
}


def _component(classes=(), elements=(), story_id="card--default"):
    return ComponentHTML(story_id=story_id, html="", classes=list(classes), elements=list(elements))


def test_known_components_are_normalized():
    assert known_components(STORIES) == {
        "card": "card",
        "button": "button",
        "buttongroup": "button-group",
        "icon": "icon",
    }


def test_longest_component_id_wins():
    known = known_components(STORIES)

    assert match_component("ButtonGroup-root", known) == "button-group"
    assert match_component("button__label", known) == "button"
    assert match_component("wrapper", known) is None


def test_classes_name_internal_components():
    found = find_dependencies(
        _component(classes=["card", "card__header", "Button-root", "layout-row"]), STORIES
    )

    # the card's own classes are not a dependency
    assert found.internal == ["button"]
    assert found.external == []


def test_custom_elements_are_internal_or_external():
    found = find_dependencies(
        _component(elements=["div", "button", "icon-svg", "ds-tooltip", "card-body"]), STORIES
    )

    assert found.internal == ["icon"]
    assert found.external == ["ds-tooltip"]


def test_to_dict_shape():
    found = find_dependencies(
        _component(classes=["button"], elements=["ds-tooltip"]), STORIES
    )

    assert found.to_dict() == {
        "storyId": "card--default",
        "dependencies": ["button", "ds-tooltip"],
        "internalComponents": ["button"],
        "externalComponents": ["ds-tooltip"],
    }


def test_component_without_dependencies():
    found = find_dependencies(_component(classes=["card"], elements=["div"]), STORIES)

    assert found.dependencies == []
