"""Copy/download gate: only valid configurations leave the editor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from openslo_editor.errors import InvalidConfigurationError
from openslo_editor.slo.renderer import render
from openslo_editor.slo.spec import Configuration
from openslo_editor.slo.validator import validate


@dataclass(frozen=True)
class ExportedDocument:
    """A rendered document ready to be written or copied."""

    filename: str
    content: str
    media_type: str = "text/yaml"


def export_filename(config: Configuration) -> str:
    """File name offered for download, ``config.yaml`` when unnamed."""
    return f"{config.name or 'config'}.yaml"


def export_document(config: Configuration) -> ExportedDocument:
    """Render ``config`` for export.

    Raises InvalidConfigurationError if validation reports any problem.
    """
    errors = validate(config)
    if errors:
        raise InvalidConfigurationError(errors, action="export")
    return ExportedDocument(filename=export_filename(config), content=render(config) + "\n")


def write_document(config: Configuration, directory: str | Path = ".") -> Path:
    """Export ``config`` into ``directory`` and return the written path."""
    document = export_document(config)
    path = Path(directory) / document.filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.content, encoding="utf-8")
    return path
