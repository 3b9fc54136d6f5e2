"""Request and response bodies for the HTTP API."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

RowId = Annotated[int, Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]


class VersionResponse(BaseModel):
    version: str


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category_id: int
    parent_id: Optional[int] = None
    order: int
    completed: bool = False


class TaskRequest(BaseModel):
    """Body for creating or updating a task."""

    title: str = Field(..., examples=["Buy milk"])
    description: str = Field(default="", examples=["2 litres, semi-skimmed"])
    category_id: RowId = Field(..., examples=[1])
    parent_id: Optional[RowId] = Field(
        default=None, description="Parent task ID, omit for a top-level task"
    )

    @field_validator("description", mode="before")
    @classmethod
    def null_description_is_empty(cls, value):
        return "" if value is None else value


class TaskPositionRequest(BaseModel):
    id: RowId
    parent_id: Optional[RowId] = None


class ReorderRequest(BaseModel):
    """Tasks in their desired order; each task's index becomes its order."""

    tasks: List[TaskPositionRequest]
