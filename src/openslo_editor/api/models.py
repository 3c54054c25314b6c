"""Pydantic request/response models for the openslo-editor REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ValidationResponse(BaseModel):
    """Validator output for one configuration snapshot."""

    errors: dict[str, str] = Field(default_factory=dict)
    valid: bool


class RenderResponse(BaseModel):
    """Rendered document plus the export gate, side by side."""

    document: str
    errors: dict[str, str] = Field(default_factory=dict)
    exportable: bool


class TemplateListResponse(BaseModel):
    templates: list[str] = Field(default_factory=list)


class LibraryResponse(BaseModel):
    """Saved configurations in their persisted (camelCase) shape."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0


class AssistantRequest(BaseModel):
    """Plain-language description of the SLO or SLI to draft."""

    description: str = Field(..., min_length=1)


class AssistantResponse(BaseModel):
    """An unsaved draft with the same validation result as any other input."""

    draft: dict[str, Any]
    document: str
    errors: dict[str, str] = Field(default_factory=dict)
    valid: bool


class DeleteResponse(BaseModel):
    """The deleted identifier and the caller's current configuration, if sent."""

    deleted: str
    current: dict[str, Any] | None = None
