# FILE: aibuilder/schemas/generate.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProjectType(str, Enum):
    component = "component"
    landing = "landing"
    dashboard = "dashboard"
    ecommerce = "ecommerce"
    portfolio = "portfolio"
    blog = "blog"
    saas = "saas"
    fullstack = "fullstack"


def _not_blank(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} is required")
    return value


class GenerateRequest(BaseModel):
    prompt: str
    type: ProjectType = ProjectType.component

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str):
        return _not_blank(v, "Prompt")

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v):
        # null from the client means "use the default"
        if v is None or v == "":
            return ProjectType.component
        return str(v).lower().strip()


class DescriptionRequest(BaseModel):
    description: str

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str):
        return _not_blank(v, "Description")


class ImproveRequest(BaseModel):
    code: str
    instructions: str

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str):
        return _not_blank(v, "Code")

    @field_validator("instructions")
    @classmethod
    def validate_instructions(cls, v: str):
        return _not_blank(v, "Instructions")


class ExplainRequest(BaseModel):
    code: str

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str):
        return _not_blank(v, "Code")


class GenerationResult(BaseModel):
    code: str
    provider: str
    tokens_used: Optional[int] = Field(default=None, serialization_alias="tokensUsed")
