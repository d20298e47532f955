"""
Keyword vocabulary ↔ boolean search flags.

The book keywords are stored together in one JSON column but are searched
one flag at a time (?javascript=true&python=true). This table is the only
place that knows the pairing.
"""

from __future__ import annotations

from typing import Any, Mapping

from shared.config.constants import Keyword

KEYWORD_FLAGS: dict[str, Keyword] = {
    "javascript": Keyword.JAVASCRIPT,
    "typescript": Keyword.TYPESCRIPT,
    "java": Keyword.JAVA,
    "python": Keyword.PYTHON,
}


def is_flag_set(value: Any) -> bool:
    """A flag is set only by the text "true" (any case)."""
    return isinstance(value, str) and value.strip().lower() == "true"


def keywords_from_flags(params: Mapping[str, Any]) -> list[str]:
    """Keyword labels for every flag in params whose value is "true"."""
    return [
        keyword.value
        for flag, keyword in KEYWORD_FLAGS.items()
        if is_flag_set(params.get(flag))
    ]

