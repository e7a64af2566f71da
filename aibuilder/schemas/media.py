# FILE: aibuilder/schemas/media.py
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ImageProvider = Literal["stability", "huggingface"]


class ImageRequest(BaseModel):
    prompt: str
    style: Optional[str] = None
    provider: Optional[ImageProvider] = None

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str):
        if not v or not v.strip():
            raise ValueError("Prompt is required")
        return v


class ImageResult(BaseModel):
    image: str
    provider: str


class TTSRequest(BaseModel):
    text: str
    voice_id: Optional[str] = Field(default=None, alias="voiceId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str):
        if not v or not v.strip():
            raise ValueError("Text is required")
        return v
