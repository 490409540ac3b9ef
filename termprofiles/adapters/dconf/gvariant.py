"""
GVariant Text - Parse the values printed by ``dconf read``.

Only the subset used for profile settings is understood: strings, string
arrays, booleans and plain integers, optionally prefixed with a type
annotation such as ``@as []``.
"""

from __future__ import annotations

import ast
from typing import Any

from termprofiles.config.errors import MalformedReplyError

__all__ = ["parse_gvariant_text"]

_BOOLEANS = {"true": True, "false": False}


def parse_gvariant_text(text: str) -> tuple[str, Any]:
    """
    Parse GVariant text into ``(signature, value)``.

    Args:
        text: Output of ``dconf read``

    Returns:
        Type signature and Python value

    Raises:
        MalformedReplyError: If the text cannot be parsed
    """
    text = text.strip()
    if not text:
        raise MalformedReplyError("Empty GVariant text")

    signature: str | None = None
    if text.startswith("@"):
        signature, _, text = text[1:].partition(" ")
        text = text.strip()

    if text in _BOOLEANS:
        return signature or "b", _BOOLEANS[text]

    try:
        value = ast.literal_eval(text)
    except (ValueError, SyntaxError) as e:
        raise MalformedReplyError("Unparseable GVariant text", {"text": text}) from e

    return signature or _infer_signature(value), value


def _infer_signature(value: Any) -> str:
    if isinstance(value, str):
        return "s"
    if isinstance(value, bool):
        return "b"
    if isinstance(value, int):
        return "i"
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return "as"
    return "v"
