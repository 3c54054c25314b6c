"""
REST API for openslo-editor.

Requires the ``api`` extra (``pip install openslo-editor[api]``)::

    uvicorn openslo_editor.api.server:app

Endpoints:
    GET    /health                   — Service health check
    POST   /api/v1/validate          — Validation result for a configuration
    POST   /api/v1/render            — Rendered document + validation result
    POST   /api/v1/export            — Download a valid document
    GET    /api/v1/templates         — Built-in template names
    GET    /api/v1/templates/{name}  — Configuration pre-filled from a template
    GET    /api/v1/library           — Saved configurations
    POST   /api/v1/library           — Save a configuration
    GET    /api/v1/library/{id}      — Open a saved configuration
    DELETE /api/v1/library/{id}      — Delete a saved configuration
    POST   /api/v1/assistant         — Draft a configuration from a description
"""

from __future__ import annotations


def create_app(*args, **kwargs):  # type: ignore[no-untyped-def]
    """Create the FastAPI application (requires ``openslo-editor[api]`` extra)."""
    from openslo_editor.api.server import create_app as _factory

    return _factory(*args, **kwargs)


__all__ = ["create_app"]
