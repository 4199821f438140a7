"""Metadata cleanup before records are sent to the vector store."""

import re
from typing import Any, Dict

# Lone surrogates, plus astral-plane characters, which UTF-16 encodes as surrogate pairs.
_SURROGATES = re.compile("[\ud800-\udfff\U00010000-\U0010ffff]")
_CONTROL_CHARACTERS = re.compile("[\x00-\x1f\x7f]")


def sanitize_text(value: str) -> str:
    """Drop surrogate code points and replace each ASCII control character with a space."""
    return _CONTROL_CHARACTERS.sub(" ", _SURROGATES.sub("", value))


def sanitize_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``metadata`` with every string value sanitized.

    Non-string values are passed through unchanged and no key is added or removed.
    """
    return {key: sanitize_text(value) if isinstance(value, str) else value for key, value in metadata.items()}
