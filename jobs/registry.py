"""
Operation registry — maps operation names to operation instances.

A job knows its operation name ("get_component_html") but the executor needs
the object that runs it. This registry does that lookup. Operations hold
their collaborators (Storybook client, timeout runner), so the registry is
built once at startup by create_default_registry() and handed to the
executor, instead of living as module state.
"""

from typing import Optional

from config.settings import Settings
from jobs.base import AbstractOperation
from jobs.component_dependencies import ComponentDependenciesOperation
from jobs.component_html import ComponentHTMLOperation
from models.exceptions import UnknownOperationError
from storybook.client import StorybookClient
from worker.timeout import TimeoutRunner


class OperationRegistry:

    def __init__(self):
        self._operations: dict[str, AbstractOperation] = {}

    def register(self, operation: AbstractOperation) -> None:
        self._operations[operation.operation_name] = operation

    def get(self, name: str) -> AbstractOperation:
        """Look up an operation by name. Raises UnknownOperationError if unknown."""
        operation = self._operations.get(name)
        if operation is None:
            raise UnknownOperationError(f"Unknown operation: {name}")
        return operation

    def names(self) -> list[str]:
        return list(self._operations)


def create_default_registry(
    client: StorybookClient,
    timeout_runner: TimeoutRunner,
    settings: Optional[Settings] = None,
) -> OperationRegistry:
    registry = OperationRegistry()
    registry.register(ComponentHTMLOperation(client, timeout_runner, settings))
    registry.register(ComponentDependenciesOperation(client, timeout_runner, settings))
    return registry
