"""
Built-in Templates — pre-filled starting points for new documents.

Usage:
    from openslo_editor.specs import from_template, list_templates

    # List available templates
    templates = list_templates()
    # ['availability', 'latency', 'sli-reference', 'standalone-sli']

    # Start a new document from a template
    config = from_template("latency")
    print(config.name)  # "api-latency"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from openslo_editor.errors import TemplateNotFoundError
from openslo_editor.slo.spec import DEFAULT_CONFIGURATION, Configuration

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def list_templates(templates_dir: Optional[str] = None) -> List[str]:
    """List available template names."""
    d = Path(templates_dir) if templates_dir else _TEMPLATES_DIR
    if not d.exists():
        return []
    return sorted(p.stem for p in d.glob("*.yaml"))


def load_template_data(
    name: str,
    templates_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load the partial configuration stored in a template.

    Args:
        name: Template name (e.g. "availability")
        templates_dir: Optional custom templates directory path

    Returns:
        Dict of camelCase configuration fields the template pre-fills
    """
    d = Path(templates_dir) if templates_dir else _TEMPLATES_DIR
    path = d / f"{name}.yaml"
    if not path.exists():
        raise TemplateNotFoundError(name, list_templates(templates_dir))
    content = path.read_text(encoding="utf-8")
    return yaml.safe_load(content) or {}


def merge_partial(base: Configuration, partial: Dict[str, Any]) -> Configuration:
    """Overlay a partial configuration on ``base`` with the identifier cleared.

    The merge is shallow: a partial ``indicator`` replaces the base
    indicator as a whole.
    """
    data = base.to_dict()
    for key, value in partial.items():
        field = Configuration.model_fields.get(key)
        data[field.alias if field is not None and field.alias else key] = value
    data["id"] = ""
    return Configuration.model_validate(data)


def from_template(
    name: str,
    base: Configuration = DEFAULT_CONFIGURATION,
    templates_dir: Optional[str] = None,
) -> Configuration:
    """Create a new, unsaved configuration from a built-in template."""
    return merge_partial(base, load_template_data(name, templates_dir))


__all__ = ["from_template", "list_templates", "load_template_data", "merge_partial"]
