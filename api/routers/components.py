"""
Component endpoints.

POST /components/html    → Extract a component's HTML
                            async=true (default): queue a job, 202 + job_id
                            async=false: run inline, return the markup
                            variantsOnly=true: list the component's variants
POST /components/dependencies → Other components a story renders (inline)
GET  /components/        → List components, optionally by category, paginated
GET  /components/search  → Search by text query and/or purpose, paginated

Storybook calls are blocking (httpx.Client), so every handler that talks to
Storybook pushes the call to the threadpool with run_in_threadpool instead
of blocking the event loop. Errors raised on those paths (story not found,
timeout, upstream failure) are turned into HTTP responses by the exception
handlers registered in api/main.py.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_engine, get_executor, get_storybook_client
from api.schemas.component import (
    ComponentDependenciesRequest,
    ComponentDependenciesResult,
    ComponentHTMLRequest,
    ComponentHTMLResult,
    ComponentListResponse,
    ComponentVariants,
    PaginationInfo,
)
from api.schemas.job import JobSubmitted
from models.enums import OperationName, SearchIn
from scheduler.engine import SchedulerEngine
from storybook.client import StorybookClient
from storybook.components import components_sorted, map_stories_to_components
from storybook.pagination import paginate, pagination_message
from storybook.resolver import list_variants, stories_from_index
from storybook.search import search_components
from worker.executor import JobExecutor

router = APIRouter(prefix="/components", tags=["components"])


@router.post(
    "/html",
    response_model=Union[JobSubmitted, ComponentVariants, ComponentHTMLResult],
    response_model_exclude_none=True,
)
async def get_component_html(
    body: ComponentHTMLRequest,
    response: Response,
    engine: SchedulerEngine = Depends(get_engine),
    executor: JobExecutor = Depends(get_executor),
    client: StorybookClient = Depends(get_storybook_client),
):
    if body.variantsOnly:
        index = await run_in_threadpool(client.fetch_stories_index)
        variants = list_variants(body.componentId, stories_from_index(index))
        return ComponentVariants(componentId=body.componentId, variants=variants)

    if body.async_:
        job_id = engine.submit(OperationName.GET_COMPONENT_HTML.value, body.to_job_input())
        response.status_code = 202
        return JobSubmitted(job_id=job_id, component_id=body.componentId)

    result = await run_in_threadpool(
        executor.run_sync, OperationName.GET_COMPONENT_HTML.value, body.to_job_input()
    )
    return ComponentHTMLResult(**result)


@router.post("/dependencies", response_model=ComponentDependenciesResult)
async def get_component_dependencies(
    body: ComponentDependenciesRequest,
    executor: JobExecutor = Depends(get_executor),
) -> ComponentDependenciesResult:
    result = await run_in_threadpool(
        executor.run_sync,
        OperationName.GET_COMPONENT_DEPENDENCIES.value,
        {"componentId": body.componentId},
    )
    return ComponentDependenciesResult(**result)


@router.get("/", response_model=ComponentListResponse, response_model_exclude_none=True)
async def list_components(
    category: Optional[str] = Query(None, description="Only components under this category path"),
    compact: bool = Query(False, description="Return variant counts instead of full story lists"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    client: StorybookClient = Depends(get_storybook_client),
) -> ComponentListResponse:
    index = await run_in_threadpool(client.fetch_stories_index)

    def in_category(story: dict, name: str, story_category: Optional[str]) -> bool:
        return category is None or (story_category or "").lower() == category.lower()

    components = components_sorted(
        map_stories_to_components(stories_from_index(index), filter_fn=in_category)
    )
    result = paginate(components, page, page_size)
    suffix = f"category: {category}" if category else ""
    return ComponentListResponse(
        components=[c.to_compact() if compact else c.to_dict() for c in result.items],
        pagination=PaginationInfo(**result.to_dict()),
        message=pagination_message(result, "Found", suffix),
    )


@router.get("/search", response_model=ComponentListResponse, response_model_exclude_none=True)
async def search(
    query: Optional[str] = Query(None, description='Text to look for; "*" lists everything'),
    purpose: Optional[str] = Query(None, description='e.g. "form inputs", "navigation", "feedback"'),
    search_in: SearchIn = Query(SearchIn.ALL, alias="searchIn"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    client: StorybookClient = Depends(get_storybook_client),
) -> ComponentListResponse:
    if not query and not purpose:
        raise HTTPException(
            status_code=422,
            detail='At least one of "query" or "purpose" parameter is required',
        )

    index = await run_in_threadpool(client.fetch_stories_index)
    components, purpose_cfg = search_components(
        stories_from_index(index), query=query, purpose=purpose, search_in=search_in
    )
    result = paginate(components, page, page_size)

    described = []
    if query and query not in ("*", ".*"):
        described.append(f'query: "{query.lower()}"')
    if purpose:
        described.append(f'purpose: "{purpose}"')
    if not described:
        described.append("all components")

    return ComponentListResponse(
        components=[c.to_compact() for c in result.items],
        pagination=PaginationInfo(**result.to_dict()),
        message=pagination_message(result, "Found", f"{', '.join(described)}, searched in: {search_in.value}"),
        description=purpose_cfg.description if purpose_cfg else None,
    )
