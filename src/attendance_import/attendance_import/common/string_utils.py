from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def tokenize_name(name: Any) -> frozenset[str]:
    """Lower-cased whitespace tokens of a name, as a set."""
    if not isinstance(name, str):
        return frozenset()
    return frozenset(name.lower().split())


def safe_encode_text(text: Any) -> Any:
    """Replace lone UTF-16 surrogates so the text can be encoded as UTF-8.

    Spreadsheet readers occasionally hand over broken surrogate pairs; JSON
    encoders and MySQL reject those. Non-string values are returned unchanged.
    """

    if not isinstance(text, str):
        return text
    try:
        text.encode("utf-8")
        return text
    except UnicodeEncodeError:
        return _SURROGATE_RE.sub("\ufffd", text)


def safe_json_object(obj: Any) -> Any:
    """Recursively clean string keys/values of a JSON-like structure."""
    if obj is None or isinstance(obj, (bool, int, float, date, datetime)):
        return obj
    if isinstance(obj, str):
        return safe_encode_text(obj)
    if isinstance(obj, (list, tuple)):
        return [safe_json_object(v) for v in obj]
    if isinstance(obj, dict):
        return {safe_encode_text(k): safe_json_object(v) for k, v in obj.items()}
    return obj
