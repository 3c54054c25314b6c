"""Saved-document library.

The core only needs ``get_all``, ``upsert`` and ``delete``; any key-value
medium keyed by configuration identifier can back it.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import ValidationError

from openslo_editor.errors import InvalidConfigurationError
from openslo_editor.slo.edits import clear_identifier, update_fields
from openslo_editor.slo.spec import Configuration
from openslo_editor.slo.validator import validate

logger = logging.getLogger(__name__)


@runtime_checkable
class LibraryStore(Protocol):
    """Persistence collaborator keyed by configuration identifier."""

    def get_all(self) -> list[Configuration]: ...

    def upsert(self, config: Configuration) -> None: ...

    def delete(self, item_id: str) -> bool: ...


class InMemoryLibraryStore:
    """Library kept in process memory, in insertion order."""

    def __init__(self, items: list[Configuration] | None = None) -> None:
        self._items: dict[str, Configuration] = {}
        for item in items or []:
            self.upsert(item)

    def get_all(self) -> list[Configuration]:
        return list(self._items.values())

    def upsert(self, config: Configuration) -> None:
        if not config.id:
            raise ValueError("Cannot store a configuration without an identifier")
        self._items[config.id] = config

    def delete(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None


class JsonFileLibraryStore:
    """Library persisted as one JSON array of camelCase configurations.

    A missing file is an empty library. A file that cannot be parsed is
    logged and also read as empty; the next write replaces it.
    """

    def __init__(self, path: str | Path = ".openslo/library.json") -> None:
        self.path = Path(path)

    def _read(self) -> list[Configuration]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return [Configuration.model_validate(item) for item in raw]
        except (OSError, ValueError, TypeError, ValidationError):
            logger.error("Failed to parse saved items from %s", self.path, exc_info=True)
            return []

    def _write(self, items: list[Configuration]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([item.to_dict() for item in items], f, indent=2)

    def get_all(self) -> list[Configuration]:
        return self._read()

    def upsert(self, config: Configuration) -> None:
        if not config.id:
            raise ValueError("Cannot store a configuration without an identifier")
        items = self._read()
        for index, item in enumerate(items):
            if item.id == config.id:
                items[index] = config
                break
        else:
            items.append(config)
        self._write(items)

    def delete(self, item_id: str) -> bool:
        items = self._read()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self._write(remaining)
        return True


def save_to_library(store: LibraryStore, config: Configuration) -> Configuration:
    """Save ``config`` and return it with its (possibly new) identifier.

    The identifier is assigned on first save and kept on every later save.
    Raises InvalidConfigurationError if the configuration does not validate.
    """
    errors = validate(config)
    if errors:
        raise InvalidConfigurationError(errors, action="save")
    saved = config if config.id else update_fields(config, id=str(uuid.uuid4()))
    store.upsert(saved)
    logger.info("Saved %s '%s' as %s", saved.kind.value, saved.name, saved.id)
    return saved


def delete_from_library(
    store: LibraryStore,
    current: Configuration | None,
    item_id: str,
) -> Configuration | None:
    """Delete a saved item and return the editor's current configuration.

    When the deleted item is the one being edited its identifier is cleared,
    so a later save creates a new item instead of updating a deleted one.
    Callers with no configuration open pass ``None`` and get ``None`` back.
    """
    if store.delete(item_id):
        logger.info("Deleted library item %s", item_id)
    if current is not None and current.id == item_id:
        return clear_identifier(current)
    return current


def from_saved(item: Configuration | Mapping[str, Any]) -> Configuration:
    """Open a saved item for editing; its identifier is preserved.

    Accepts a stored configuration or its persisted camelCase mapping.
    """
    if isinstance(item, Configuration):
        return item
    return Configuration.model_validate(item)


def load_from_library(store: LibraryStore, item_id: str) -> Configuration | None:
    """Look up a saved item by identifier and open it with ``from_saved``."""
    for item in store.get_all():
        if item.id == item_id:
            return from_saved(item)
    return None
