"""
get_component_html — render one story and return its markup.

Example payloads:
    {"componentId": "button--primary"}                       → fetched as-is
    {"componentId": "button"}                                → resolved first
    {"componentId": "button", "includeStyles": true}         → adds filtered CSS
    {"componentId": "card--default", "timeout": 20000}       → custom timeout

Example result:
    {
        "storyId": "button--default",
        "html": "<button class=\"btn btn-primary\">Click</button>",
        "classes": ["btn", "btn-primary"],
        "styles": [".btn { padding: 4px; }"]       # only with includeStyles
    }

Steps:
1. Resolve the story id if the caller gave a bare component id
   (needs the stories index, one extra request)
2. Work out the timeout: payload["timeout"] or DEFAULT_FETCH_TIMEOUT_MS,
   scaled for CI / development
3. Race the markup fetch against that timeout (TimeoutRunner)
4. Filter Storybook's own CSS out of the styles when includeStyles is set
"""

import logging
from typing import Optional

from config.settings import Settings, settings as default_settings
from config.timeouts import get_environment_timeout
from jobs.base import AbstractOperation
from models.enums import OperationName
from storybook.client import StorybookClient
from storybook.css import filter_storybook_styles
from storybook.resolver import needs_resolution, resolve_story_id, stories_from_index
from worker.timeout import TimeoutRunner

logger = logging.getLogger(__name__)


class ComponentHTMLOperation(AbstractOperation):

    def __init__(
        self,
        client: StorybookClient,
        timeout_runner: TimeoutRunner,
        settings: Optional[Settings] = None,
    ):
        self._client = client
        self._timeout_runner = timeout_runner
        self._settings = settings or default_settings

    def run(self, payload: dict) -> dict:
        component_id = payload.get("componentId")
        if not component_id:
            raise ValueError("Missing 'componentId' in payload")

        story_id = self.resolve(component_id)
        timeout_ms = self.effective_timeout(payload.get("timeout"))

        component = self._timeout_runner.run(
            self._client.fetch_component_html, timeout_ms, story_id
        )

        result = {
            "storyId": component.story_id,
            "html": component.html,
            "classes": component.classes,
        }
        if payload.get("includeStyles"):
            result["styles"] = filter_storybook_styles(component.styles)
        return result

    def resolve(self, component_id: str) -> str:
        if not needs_resolution(component_id):
            return component_id
        stories = stories_from_index(self._client.fetch_stories_index())
        story_id = resolve_story_id(component_id, stories)
        logger.debug(f"Resolved component {component_id} → {story_id}")
        return story_id

    def effective_timeout(self, requested_ms: Optional[int]) -> int:
        base = requested_ms or self._settings.DEFAULT_FETCH_TIMEOUT_MS
        return get_environment_timeout(base, self._settings)

    @property
    def operation_name(self) -> str:
        return OperationName.GET_COMPONENT_HTML.value
