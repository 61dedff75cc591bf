"""
Abstract base class for operations a job can run.

A job only stores an operation name and an input dict. The executor looks up
the operation by that name in an OperationRegistry and calls
operation.run(payload) without knowing which operation it is.

Strategy pattern:
- AbstractOperation = interface
- ComponentHTMLOperation, ComponentDependenciesOperation = implementations
- registry.py = name → instance lookup

To add a new operation:
1. Create a class that inherits AbstractOperation
2. Implement run() and operation_name
3. Register it in create_default_registry()
"""

from abc import ABC, abstractmethod


class AbstractOperation(ABC):

    @abstractmethod
    def run(self, payload: dict) -> dict:
        """
        Execute the operation.

        Args:
            payload: the job's input, exactly as validated by the API.

        Returns:
            dict stored as the job's result.

        Raises:
            Any exception → the job is marked FAILED with str(exc) as error.
            There are no retries.
        """
        ...

    @property
    @abstractmethod
    def operation_name(self) -> str:
        """Unique identifier matching OperationName (e.g., 'get_component_html')."""
        ...
