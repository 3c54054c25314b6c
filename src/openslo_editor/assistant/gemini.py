"""Google Gemini completion backend for the assistant.

Requires the ``assistant`` extra (``pip install openslo-editor[assistant]``).
The reply is constrained to JSON with a response schema, so the generator
sees the configuration shape it asked for in the prompt.

Example:
    from openslo_editor.assistant import ConfigGenerator, GeminiCompletion

    generator = ConfigGenerator(GeminiCompletion(api_key="..."))
    draft = generator.propose("p99 checkout latency under 300ms")
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from openslo_editor.errors import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

_SOURCE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "type": {"type": "STRING"},
        "query": {"type": "STRING"},
    },
}

# The schema dialect has no unions: threshold and ratio fields share one
# object and the unused branch is dropped when the draft is built.
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "kind": {"type": "STRING", "enum": ["SLO", "SLI"]},
        "name": {"type": "STRING"},
        "displayName": {"type": "STRING"},
        "description": {"type": "STRING"},
        "service": {"type": "STRING"},
        "target": {"type": "NUMBER"},
        "timeWindowCount": {"type": "NUMBER"},
        "timeWindowUnit": {"type": "STRING", "enum": ["d", "h", "m", "w"]},
        "indicatorMode": {"type": "STRING", "enum": ["inline", "reference"]},
        "indicatorRef": {"type": "STRING"},
        "budgetingMethod": {"type": "STRING", "enum": ["occurrences", "timeslices"]},
        "indicator": {
            "type": "OBJECT",
            "properties": {
                "type": {"type": "STRING", "enum": ["threshold", "ratio"]},
                "source": _SOURCE_SCHEMA,
                "operator": {"type": "STRING", "enum": ["lt", "lte", "gt", "gte"]},
                "value": {"type": "NUMBER"},
                "good": _SOURCE_SCHEMA,
                "bad": _SOURCE_SCHEMA,
                "total": _SOURCE_SCHEMA,
            },
            "required": ["type"],
        },
    },
}


class GeminiCompletion:
    """Prompt-in, text-out callable backed by ``google.generativeai``.

    Args:
        api_key: Gemini API key.
        model: Gemini model name.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL) -> None:
        if not api_key:
            raise GenerationError("API key is required")

        try:
            import google.generativeai as genai
        except ImportError as e:
            raise GenerationError(
                "The Gemini backend requires the assistant extra: pip install openslo-editor[assistant]"
            ) from e

        genai.configure(api_key=api_key)
        self.model = model
        self._model = genai.GenerativeModel(
            model,
            generation_config={
                "response_mime_type": "application/json",
                "response_schema": RESPONSE_SCHEMA,
            },
        )

    def __call__(self, prompt: str) -> str:
        logger.debug("Requesting draft configuration from %s", self.model)
        response = self._model.generate_content(prompt)
        try:
            return response.text
        except ValueError as e:
            # Raised by the SDK when the candidate was blocked or is empty.
            raise GenerationError(f"No response from AI: {e}") from e
