"""OpenSLO Editor — compose SLO and SLI declarations as OpenSLO documents.

openslo-editor is the validation-and-generation core behind an
interactive SLO editor. It turns an in-memory configuration into an
OpenSLO YAML document and decides whether that configuration may be
exported:

Core concepts
-------------
* **Configuration** — an immutable snapshot of the editor's form
  (``openslo_editor.slo.spec``). Edits produce new snapshots through
  the pure functions in ``openslo_editor.slo.edits``.

* **Validator** — ``validate(config)`` maps field keys to problems; an
  empty mapping means the document can be copied, downloaded or saved.

* **Renderer** — ``render(config)`` always produces a document, valid or
  not, with a fixed key order and indentation.

Quick start::

    from openslo_editor import DEFAULT_CONFIGURATION, render, validate
    from openslo_editor.slo.edits import update_fields

    config = update_fields(DEFAULT_CONFIGURATION, target=0.995)
    assert validate(config) == {}
    print(render(config))
"""

from openslo_editor.slo.renderer import render
from openslo_editor.slo.spec import DEFAULT_CONFIGURATION, Configuration
from openslo_editor.slo.validator import is_valid, validate

__all__ = [
    "Configuration",
    "DEFAULT_CONFIGURATION",
    "is_valid",
    "render",
    "validate",
]

__version__ = "0.1.0"
