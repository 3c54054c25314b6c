"""Natural-language assistant — draft a configuration from a description.

The assistant wraps any text-completion backend (a hosted LLM client, a
local model, a canned fake in tests) passed in as a callable that takes a
prompt and returns the model's text. Its output is untrusted: it becomes an
ordinary Configuration that still has to pass ``validate``.

Example:
    from openslo_editor.assistant import ConfigGenerator

    generator = ConfigGenerator(complete=my_llm_client.complete)
    draft = generator.propose("99.9% availability for the checkout API")
    errors = validate(draft)
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import Any, Dict

from pydantic import ValidationError

from openslo_editor.errors import GenerationError
from openslo_editor.slo.spec import DEFAULT_CONFIGURATION, Configuration
from openslo_editor.assistant.gemini import DEFAULT_MODEL
from openslo_editor.specs import merge_partial

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```json\n?|\n?```")

PROMPT_TEMPLATE = """
You are an expert Site Reliability Engineer (SRE) proficient in OpenSLO.
Based on the following natural language description, generate a JSON object
representing the state of an SLO or SLI configuration.

User Description: "{description}"

If the user requests an SLI, set "kind" to "SLI".
If the user requests an SLO, set "kind" to "SLO".
If the user wants to reference an existing SLI, use "indicatorMode": "reference"
and provide "indicatorRef".
Otherwise use "indicatorMode": "inline" and provide the indicator.

The JSON structure MUST match this schema exactly:
{{
  "kind": "SLO" | "SLI",
  "name": "string (kebab-case)",
  "displayName": "string",
  "description": "string",
  "service": "string",
  "target": number (0.0 to 1.0),
  "timeWindowCount": number,
  "timeWindowUnit": "d" | "h" | "m" | "w",
  "indicatorMode": "inline" | "reference",
  "indicatorRef": "string",
  "budgetingMethod": "occurrences" | "timeslices",
  "indicator": {{
    "type": "threshold",
    "source": {{ "type": "string", "query": "string" }},
    "operator": "lt" | "lte" | "gt" | "gte",
    "value": number
  }} | {{
    "type": "ratio",
    "good": {{ "type": "string", "query": "string" }},
    "bad": {{ "type": "string", "query": "string" }},
    "total": {{ "type": "string", "query": "string" }}
  }}
}}

If the user does not specify a metric query, invent a plausible Prometheus
query based on the service name.
Only return valid JSON.
"""


def clean_json(text: str) -> str:
    """Strip Markdown code fences around a JSON reply."""
    return _FENCE.sub("", text).strip()


class ConfigGenerator:
    """Turn free-text intent into a draft configuration.

    Args:
        complete: Callable taking a prompt and returning the model's reply.
        model: Model name, recorded for logging only.
    """

    def __init__(
        self,
        complete: Callable[[str], str],
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._complete = complete
        self.model = model

    def build_prompt(self, description: str) -> str:
        return PROMPT_TEMPLATE.format(description=description)

    def generate(self, description: str) -> Dict[str, Any]:
        """Ask the backend for a partial configuration mapping.

        Raises:
            GenerationError: the reply was empty or not a JSON object.
        """
        text = self._complete(self.build_prompt(description))
        if not text or not text.strip():
            raise GenerationError("No response from AI")
        try:
            partial = json.loads(clean_json(text))
        except json.JSONDecodeError as e:
            logger.error("Error generating SLO with %s: %s", self.model, e)
            raise GenerationError(f"Assistant reply is not valid JSON: {e}") from e
        if not isinstance(partial, dict):
            raise GenerationError("Assistant reply is not a JSON object")
        partial.pop("id", None)
        return partial

    def propose(
        self,
        description: str,
        base: Configuration = DEFAULT_CONFIGURATION,
    ) -> Configuration:
        """Generate a draft merged over ``base``, unsaved and unvalidated."""
        partial = self.generate(description)
        try:
            return merge_partial(base, partial)
        except ValidationError as e:
            logger.error("Assistant proposed a malformed configuration: %s", e)
            raise GenerationError(f"Assistant reply does not fit the configuration shape: {e}") from e
