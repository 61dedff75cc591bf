"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("queued", not "JobStatus.QUEUED")
- They work as FastAPI query parameters
- Typos become immediate errors instead of silent bugs
"""

import enum


class JobStatus(str, enum.Enum):
    QUEUED = "queued"          # submitted, waiting in the pending queue
    RUNNING = "running"        # admitted by the scheduler, pipeline in flight
    COMPLETED = "completed"    # finished successfully, result stored
    FAILED = "failed"          # finished with an error, error stored
    CANCELLED = "cancelled"    # cancelled by a caller while queued or running

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED})
ACTIVE_STATUSES = frozenset({JobStatus.QUEUED, JobStatus.RUNNING})


class OperationName(str, enum.Enum):
    GET_COMPONENT_HTML = "get_component_html"  # render a story and extract its markup
    GET_COMPONENT_DEPENDENCIES = "get_component_dependencies"  # other components a story renders


class JobListFilter(str, enum.Enum):
    ALL = "all"
    ACTIVE = "active"          # queued + running
    COMPLETED = "completed"    # completed + failed + cancelled


class SearchIn(str, enum.Enum):
    NAME = "name"              # component name only
    TITLE = "title"            # full story title path
    CATEGORY = "category"      # title path without the component name
    ALL = "all"
