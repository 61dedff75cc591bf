"""
Pydantic schemas for the /components endpoints.

FastAPI validates incoming data against these automatically.
If someone sends timeout=100, FastAPI returns a 422 error before our code
even runs, and no job is created.

Field names are camelCase on the wire (componentId, includeStyles, ...);
`async` is a Python keyword, so the model field is `async_` with an alias.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ComponentHTMLRequest(BaseModel):
    """Request body for POST /components/html."""

    model_config = ConfigDict(populate_by_name=True)

    componentId: str = Field(
        ...,
        min_length=1,
        description='Story id ("button--primary") or component id ("button")',
        examples=["button--primary"],
    )
    includeStyles: Optional[bool] = Field(
        default=None,
        description="Include the story's CSS, with Storybook boilerplate filtered out",
    )
    variantsOnly: Optional[bool] = Field(
        default=None,
        description="Only list the component's variants (always synchronous)",
    )
    async_: bool = Field(
        default=True,
        alias="async",
        description="true: return a job id to poll; false: wait for the result",
    )
    timeout: Optional[int] = Field(
        default=None,
        ge=5000,
        le=60000,
        description="Fetch timeout in milliseconds",
    )

    def to_job_input(self) -> dict:
        """The fields the operation reads, as stored on the job."""
        return self.model_dump(include={"componentId", "includeStyles", "timeout"}, exclude_none=True)


class ComponentHTMLResult(BaseModel):
    storyId: str
    html: str
    classes: list[str] = []
    styles: Optional[list[str]] = None


class ComponentVariants(BaseModel):
    componentId: str
    variants: list[str]


class PaginationInfo(BaseModel):
    page: int
    pageSize: int
    totalItems: int
    totalPages: int
    hasNextPage: bool


class ComponentListResponse(BaseModel):
    components: list[dict]
    pagination: PaginationInfo
    message: str
    description: Optional[str] = None   # set when searching by purpose


class ComponentDependenciesRequest(BaseModel):
    """Request body for POST /components/dependencies."""

    componentId: str = Field(
        ...,
        min_length=1,
        description='Story id ("card--default") or component id ("card")',
        examples=["card"],
    )


class ComponentDependenciesResult(BaseModel):
    storyId: str
    dependencies: list[str]
    internalComponents: list[str]
    externalComponents: list[str]
