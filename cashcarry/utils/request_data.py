"""Helpers for reading JSON request bodies."""
from typing import Any, Dict
from flask import request


def json_body() -> Dict[str, Any]:
    """
    Parsed JSON object of the current request.

    Missing, malformed or non-object bodies are treated as {} so that field
    presence checks report them as 400s.
    """
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
