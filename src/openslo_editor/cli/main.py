"""
openslo-editor CLI — validate and render OpenSLO documents from the shell.

Usage:
    openslo-editor validate my-slo.yaml
    openslo-editor render my-slo.yaml -o out.yaml
    openslo-editor export my-slo.yaml -d build/
    openslo-editor templates list
    openslo-editor templates show latency
    openslo-editor library list
    openslo-editor assistant "99.9% availability for the checkout API"
    openslo-editor version

Input files hold an editor configuration (camelCase keys, YAML or JSON),
not an OpenSLO document.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from pydantic import ValidationError

from openslo_editor import __version__
from openslo_editor.assistant import ConfigGenerator, GeminiCompletion
from openslo_editor.errors import EditorError
from openslo_editor.export import write_document
from openslo_editor.library import (
    JsonFileLibraryStore,
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


def _load_config(path: str, settings: EditorSettings) -> Configuration:
    with open(path, encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise EditorError(f"{path}: expected a mapping of configuration fields")
    return Configuration.model_validate({"apiVersion": settings.default_api_version, **data})


def _print_errors(errors: Dict[str, str]) -> None:
    for key, message in errors.items():
        print(f"  {key}: {message}", file=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openslo-editor",
        description="Validate and generate OpenSLO SLO/SLI documents",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Validate a configuration file")
    validate_parser.add_argument("file")

    render_parser = subparsers.add_parser("render", help="Render a configuration as OpenSLO YAML")
    render_parser.add_argument("file")
    render_parser.add_argument("-o", "--output", help="Write to this file instead of stdout")

    export_parser = subparsers.add_parser("export", help="Validate and write <name>.yaml")
    export_parser.add_argument("file")
    export_parser.add_argument("-d", "--directory", default=".")

    templates_parser = subparsers.add_parser("templates", help="Built-in templates")
    templates_sub = templates_parser.add_subparsers(dest="templates_command")
    templates_sub.add_parser("list", help="List template names")
    show_parser = templates_sub.add_parser("show", help="Render a template")
    show_parser.add_argument("name")

    library_parser = subparsers.add_parser("library", help="Saved-document library")
    library_sub = library_parser.add_subparsers(dest="library_command")
    library_sub.add_parser("list", help="List saved documents")
    save_parser = library_sub.add_parser("save", help="Save a configuration file")
    save_parser.add_argument("file")
    show_item_parser = library_sub.add_parser("show", help="Render a saved document")
    show_item_parser.add_argument("id")
    delete_parser = library_sub.add_parser("delete", help="Delete a saved document")
    delete_parser.add_argument("id")

    assistant_parser = subparsers.add_parser(
        "assistant", help="Draft a configuration from a plain-language description"
    )
    assistant_parser.add_argument("description")
    assistant_parser.add_argument("-o", "--output", help="Write the draft configuration (YAML) here")

    subparsers.add_parser("version", help="Show version")

    # Kept for printing sub-command help on a missing sub-command.
    parser.set_defaults(_templates=templates_parser, _library=library_parser)
    return parser


def _run_templates(parsed: argparse.Namespace) -> int:
    if parsed.templates_command == "list":
        for name in list_templates():
            print(name)
        return 0
    if parsed.templates_command == "show":
        print(render(from_template(parsed.name)))
        return 0
    parsed._templates.print_help()
    return 1


def _run_library(parsed: argparse.Namespace, settings: EditorSettings) -> int:
    store = JsonFileLibraryStore(settings.library_path)
    if parsed.library_command == "list":
        items = store.get_all()
        if not items:
            print("No saved documents.")
        for item in items:
            print(f"{item.id}  {item.kind.value}  {item.name}")
        return 0
    if parsed.library_command == "save":
        saved = save_to_library(store, _load_config(parsed.file, settings))
        print(saved.id)
        return 0
    if parsed.library_command in ("show", "delete"):
        item = load_from_library(store, parsed.id)
        if item is None:
            print(f"No saved document with id '{parsed.id}'", file=sys.stderr)
            return 1
        if parsed.library_command == "show":
            print(render(item))
        else:
            delete_from_library(store, None, parsed.id)
        return 0
    parsed._library.print_help()
    return 1


def _run_assistant(
    parsed: argparse.Namespace,
    settings: EditorSettings,
    complete: Optional[Callable[[str], str]],
) -> int:
    if complete is None:
        complete = GeminiCompletion(settings.gemini_api_key, model=settings.assistant_model)
    generator = ConfigGenerator(complete, model=settings.assistant_model)
    base = Configuration(api_version=settings.default_api_version)
    draft = generator.propose(parsed.description, base=base)
    print(render(draft))
    if parsed.output:
        with open(parsed.output, "w", encoding="utf-8") as f:
            yaml.safe_dump(draft.to_dict(), f, sort_keys=False)
    errors = validate(draft)
    if errors:
        print("draft: needs review", file=sys.stderr)
        _print_errors(errors)
        return 1
    return 0


def cli(
    args: Optional[List[str]] = None,
    settings: Optional[EditorSettings] = None,
    complete: Optional[Callable[[str], str]] = None,
) -> int:
    """Main CLI entry point. Returns exit code.

    ``complete`` replaces the Gemini backend of the ``assistant`` command.
    """
    parser = _build_parser()
    parsed = parser.parse_args(args)
    settings = settings or EditorSettings()

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed.command == "version":
        print(f"openslo-editor {__version__}")
        return 0

    try:
        if parsed.command == "validate":
            errors = validate(_load_config(parsed.file, settings))
            if errors:
                print(f"{parsed.file}: invalid", file=sys.stderr)
                _print_errors(errors)
                return 1
            print(f"{parsed.file}: ok")
            return 0

        if parsed.command == "render":
            document = render(_load_config(parsed.file, settings))
            if parsed.output:
                Path(parsed.output).write_text(document + "\n", encoding="utf-8")
            else:
                print(document)
            return 0

        if parsed.command == "export":
            path = write_document(_load_config(parsed.file, settings), parsed.directory)
            print(path)
            return 0

        if parsed.command == "templates":
            return _run_templates(parsed)

        if parsed.command == "library":
            return _run_library(parsed, settings)

        if parsed.command == "assistant":
            return _run_assistant(parsed, settings, complete)
    except EditorError as e:
        print(f"error: {e}", file=sys.stderr)
        errors = getattr(e, "errors", None)
        if errors:
            _print_errors(errors)
        return 1
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.debug("Failed to load input", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


def main() -> None:
    sys.exit(cli())
