"""
Prompt Formatter

Adds the output-shape instruction used when the caller wants JSON back.
"""

from __future__ import annotations

JSON_INSTRUCTION = (
    "IMPORTANT: Return ONLY the raw JSON without any markdown, code "
    "formatting, or explanation. The response should parse directly as JSON."
)


def format_prompt(prompt: str, request_json: bool = False) -> str:
    """Return the prompt, with the JSON instruction appended when requested."""
    if request_json:
        return f"{prompt}\n\n{JSON_INSTRUCTION}"
    return prompt
