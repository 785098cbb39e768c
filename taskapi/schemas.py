"""Task schemas: Pydantic models validating request bodies at the API boundary.

Only the keys a client actually sent are forwarded to the repository
(model_dump(exclude_unset=True)), so a PATCH never clears absent fields.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Priority = Literal["low", "medium", "high"]


class _TaskFields(BaseModel):
    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def reject_id(cls, data):
        if isinstance(data, dict) and "id" in data:
            raise ValueError("id is assigned by the server")
        return data


class TaskCreate(_TaskFields):
    """Task creation: title required and stripped."""
    title: str = Field(min_length=1, max_length=500)
    completed: bool = False
    priority: Optional[Priority] = None
    category: Optional[str] = Field(None, max_length=100)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class TaskUpdate(_TaskFields):
    """Partial update: every field optional, but a sent title may not be blank."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    category: Optional[str] = Field(None, max_length=100)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @field_validator("completed")
    @classmethod
    def completed_not_null(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("completed cannot be null")
        return v


class TaskOrder(BaseModel):
    ids: List[int]
