# FILE: aibuilder/schemas/projects.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

Framework = Literal["react", "vue", "svelte", "html"]


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    framework: Optional[Framework] = None
    template: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    code: Optional[str] = None
    published: Optional[bool] = None

    @field_validator("name", "description", "code", "published", mode="before")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        # omit a field to leave it unchanged; null is not a value
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ProjectResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)
    id: str
    user_id: str
    name: str
    description: str = ""
    framework: str = "react"
    template: Optional[str] = None
    code: str = ""
    published: bool = False
    created_at: datetime
    updated_at: datetime
