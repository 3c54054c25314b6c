"""Natural-language assistant that drafts configurations for review."""

from openslo_editor.assistant.gemini import GeminiCompletion
from openslo_editor.assistant.generator import ConfigGenerator, clean_json

__all__ = ["ConfigGenerator", "GeminiCompletion", "clean_json"]
