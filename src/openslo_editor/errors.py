"""Errors raised around the validation and rendering core.

The validator and renderer themselves never raise; these errors come from
the operations that act on their results (export, library, templates,
assistant).
"""

from __future__ import annotations


class EditorError(Exception):
    """Base class for all openslo-editor errors."""


class InvalidConfigurationError(EditorError):
    """An action that requires a valid configuration was attempted."""

    def __init__(self, errors: dict[str, str], action: str = "export") -> None:
        self.errors = dict(errors)
        self.action = action
        details = "; ".join(f"{key}: {message}" for key, message in self.errors.items())
        super().__init__(f"Cannot {action} an invalid configuration ({details})")

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {"error": type(self).__name__, "action": self.action, "errors": self.errors}


class TemplateNotFoundError(EditorError, KeyError):
    """No built-in template with the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Template '{name}' not found. Available: {available}")

    def __str__(self) -> str:
        return str(self.args[0])


class GenerationError(EditorError):
    """The assistant did not return a usable configuration."""
