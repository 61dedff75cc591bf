"""
get_component_dependencies — which other components a story renders.

Example payload:
    {"componentId": "card"}

Example result:
    {
        "storyId": "card--default",
        "dependencies": ["button", "ds-icon"],
        "internalComponents": ["button"],
        "externalComponents": ["ds-icon"]
    }

Same fetch as get_component_html (resolve, then race the markup fetch
against the environment timeout), but the stories index is always loaded:
it is the list of components the markup is matched against.
"""

import logging
from typing import Optional

from config.settings import Settings, settings as default_settings
from config.timeouts import get_environment_timeout
from jobs.base import AbstractOperation
from models.enums import OperationName
from storybook.client import StorybookClient
from storybook.dependencies import find_dependencies
from storybook.resolver import resolve_story_id, stories_from_index
from worker.timeout import TimeoutRunner

logger = logging.getLogger(__name__)


class ComponentDependenciesOperation(AbstractOperation):

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

        stories = stories_from_index(self._client.fetch_stories_index())
        story_id = resolve_story_id(component_id, stories)
        timeout_ms = get_environment_timeout(
            payload.get("timeout") or self._settings.DEFAULT_FETCH_TIMEOUT_MS, self._settings
        )

        component = self._timeout_runner.run(
            self._client.fetch_component_html, timeout_ms, story_id
        )
        found = find_dependencies(component, stories)
        logger.debug(
            f"{story_id}: {len(found.internal)} internal, {len(found.external)} external dependencies"
        )
        return found.to_dict()

    @property
    def operation_name(self) -> str:
        return OperationName.GET_COMPONENT_DEPENDENCIES.value
