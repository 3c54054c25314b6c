"""FastAPI REST API server for openslo-editor.

Exposes the validator and renderer to a presentation layer, plus the
template catalogue and the saved-document library. Each request carries the
full configuration snapshot; the server keeps no editor state.

Run with::

    uvicorn openslo_editor.api.server:app
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from openslo_editor import __version__
from openslo_editor.api.models import (
    AssistantRequest,
    AssistantResponse,
    DeleteResponse,
    LibraryResponse,
    RenderResponse,
    TemplateListResponse,
    ValidationResponse,
)
from openslo_editor.assistant import ConfigGenerator, GeminiCompletion
from openslo_editor.errors import GenerationError, InvalidConfigurationError, TemplateNotFoundError
from openslo_editor.export import export_document
from openslo_editor.library import (
    JsonFileLibraryStore,
    LibraryStore,
    delete_from_library,
    load_from_library,
    save_to_library,
)
from openslo_editor.settings import EditorSettings
from openslo_editor.slo.renderer import render
from openslo_editor.slo.spec import Configuration
from openslo_editor.slo.validator import validate
from openslo_editor.specs import from_template, list_templates

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_store(request: Request) -> LibraryStore:
    return request.app.state.store


def _get_generator(request: Request) -> ConfigGenerator:
    state = request.app.state
    if state.generator is None:
        settings: EditorSettings = state.settings
        if not settings.gemini_api_key:
            raise HTTPException(status_code=503, detail="Assistant backend is not configured")
        try:
            completion = GeminiCompletion(settings.gemini_api_key, model=settings.assistant_model)
        except GenerationError as e:
            raise HTTPException(status_code=503, detail=str(e)) from e
        state.generator = ConfigGenerator(completion, model=settings.assistant_model)
    return state.generator


# =========================================================================
# Health
# =========================================================================


@router.get("/health", tags=["health"])
def health_check(request: Request) -> dict[str, Any]:
    """Service health check."""
    return {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round(time.time() - request.app.state.start_time, 1),
    }


# =========================================================================
# Validation & rendering
# =========================================================================


@router.post("/api/v1/validate", tags=["documents"], response_model=ValidationResponse)
def validate_configuration(config: Configuration) -> ValidationResponse:
    """Validate a configuration snapshot."""
    errors = validate(config)
    return ValidationResponse(errors=errors, valid=not errors)


@router.post("/api/v1/render", tags=["documents"], response_model=RenderResponse)
def render_configuration(config: Configuration) -> RenderResponse:
    """Render a configuration, valid or not, alongside its validation result."""
    errors = validate(config)
    return RenderResponse(document=render(config), errors=errors, exportable=not errors)


@router.post("/api/v1/export", tags=["documents"], response_class=PlainTextResponse)
def export_configuration(config: Configuration) -> PlainTextResponse:
    """Download a valid configuration as ``<name>.yaml``."""
    try:
        document = export_document(config)
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
    return PlainTextResponse(
        document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


# =========================================================================
# Templates
# =========================================================================


@router.get("/api/v1/templates", tags=["templates"], response_model=TemplateListResponse)
def get_templates() -> TemplateListResponse:
    """List built-in template names."""
    return TemplateListResponse(templates=list_templates())


@router.get("/api/v1/templates/{name}", tags=["templates"])
def get_template(name: str) -> dict[str, Any]:
    """A new, unsaved configuration pre-filled from a template."""
    try:
        return from_template(name).to_dict()
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# =========================================================================
# Library
# =========================================================================


@router.get("/api/v1/library", tags=["library"], response_model=LibraryResponse)
def list_library(store: LibraryStore = Depends(_get_store)) -> LibraryResponse:
    """List saved configurations."""
    items = [item.to_dict() for item in store.get_all()]
    return LibraryResponse(items=items, count=len(items))


@router.post("/api/v1/library", tags=["library"], status_code=201)
def save_library_item(
    config: Configuration,
    store: LibraryStore = Depends(_get_store),
) -> dict[str, Any]:
    """Save a valid configuration, assigning an identifier on first save."""
    try:
        saved = save_to_library(store, config)
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
    return saved.to_dict()


@router.get("/api/v1/library/{item_id}", tags=["library"])
def get_library_item(
    item_id: str,
    store: LibraryStore = Depends(_get_store),
) -> dict[str, Any]:
    """Open a saved configuration for editing, identifier included."""
    item = load_from_library(store, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"No saved document with id '{item_id}'")
    return item.to_dict()


@router.delete("/api/v1/library/{item_id}", tags=["library"], response_model=DeleteResponse)
def delete_library_item(
    item_id: str,
    current: Optional[Configuration] = Body(default=None),
    store: LibraryStore = Depends(_get_store),
) -> DeleteResponse:
    """Delete a saved configuration.

    The body may carry the configuration currently being edited; it is
    returned with its identifier cleared when it is the deleted item.
    """
    if load_from_library(store, item_id) is None:
        raise HTTPException(status_code=404, detail=f"No saved document with id '{item_id}'")
    updated = delete_from_library(store, current, item_id)
    return DeleteResponse(deleted=item_id, current=updated.to_dict() if updated is not None else None)


# =========================================================================
# Assistant
# =========================================================================


@router.post("/api/v1/assistant", tags=["assistant"], response_model=AssistantResponse)
def draft_configuration(
    body: AssistantRequest,
    generator: ConfigGenerator = Depends(_get_generator),
) -> AssistantResponse:
    """Draft a configuration from a description; the draft is not saved."""
    try:
        draft = generator.propose(body.description)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    errors = validate(draft)
    return AssistantResponse(
        draft=draft.to_dict(),
        document=render(draft),
        errors=errors,
        valid=not errors,
    )


# =========================================================================
# Application factory
# =========================================================================


def create_app(
    store: LibraryStore | None = None,
    settings: EditorSettings | None = None,
    generator: ConfigGenerator | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Without a ``generator`` the assistant endpoint builds a Gemini-backed one
    on first use from ``settings``.
    """
    settings = settings or EditorSettings()
    application = FastAPI(
        title="OpenSLO Editor API",
        description="Validate and generate OpenSLO SLO/SLI documents",
        version=__version__,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.state.store = store if store is not None else JsonFileLibraryStore(settings.library_path)
    application.state.settings = settings
    application.state.generator = generator
    application.state.start_time = time.time()
    application.include_router(router)
    return application


app = create_app()
