# GPL-3.0-only
# summarize_api/schemas.py

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class ExtendedBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SummarizeRequest(ExtendedBase):
    url: Optional[str] = None
    title: Optional[str] = None
    content: str
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")
    description: Optional[str] = None

    @field_validator("title", "custom_prompt", "description", "url")
    def blank_to_none(cls, v):
        # the popup sends "" when the user leaves the prompt box empty
        if v is not None and not v.strip():
            return None
        return v


class SummaryOut(ExtendedBase):
    summary: str


class ErrorOut(ExtendedBase):
    error: str


class ExtractedPage(ExtendedBase):
    title: str = ""
    content: str = ""
    url: Optional[str] = None
